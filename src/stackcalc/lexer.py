from functools import reduce
import operator

import regex

from .util import ExpressionError


class Lexer:
    '''
    Lexer for the infix expression grammar.

    Splits a line into numbers, names, operators and brackets, and
    translates the few spellings that differ from Python's grammar
    (^, &&, ||, !, true, false) so the line can be handed to ast.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Support not just digits, but thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  (?:
                      \d+
                      (?:
                          _\d+
                      )*
                  )
                  '''
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    \d+
                )
                '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2, 0.2, 0.200_200
                      {INTEGRAL}?
                      \.
                      {FRACTIONAL}
                  )
              )
              # 1e3, 2.5E-7
              {EXPONENT}?
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)
    NAME = r'[A-Za-z_][A-Za-z_0-9]*'
    # Longest first, so ** is never lexed as two *.
    OPERATORS = ['**', '//', '==', '!=', '<=', '>=', '&&', '||', '<<', '>>',
                 '+', '-', '*', '/', '%', '^', '<', '>', '!', '~', '&', '|']
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    BRACKET = r'[\[\]()]'
    PUNCTUATION = r'[,:]'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<name>' + NAME + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<bracket>' + BRACKET + r')|' \
             r'(?<punctuation>' + PUNCTUATION + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    # Spellings of the expression language that Python spells differently.
    TRANSLATIONS = {
        '^': '**',
        '&&': ' and ',
        '||': ' or ',
        '!': ' not ',
        'true': 'True',
        'false': 'False',
    }

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises ExpressionError on the first thing that isn't a lexeme.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise ExpressionError("Couldn't lex {0}".format(line.strip()))

    def kind(self, match):
        '''
        Name of the group that matched the lexeme.
        '''
        return match.lastgroup

    def translate(self, line):
        '''
        Rewrite line in Python expression syntax.
        '''
        translations = type(self).TRANSLATIONS
        pieces = []
        for match in self.lex(line):
            text = match.group(0)
            if self.kind(match) in {'operator', 'name'}:
                text = translations.get(text, text)
            pieces.append(text)
        return ''.join(pieces)
