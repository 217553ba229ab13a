class Quit(Exception):
    '''
    Raised to leave the REPL. Caught by the loop, which then cleans up.
    '''


class CommandHandler:
    '''
    REPL commands: the whole-line tokens that aren't arithmetic.

    Unknown tokens are silently accepted as no-ops.
    '''

    def __init__(self, stack, registry, out=None):
        self.stack = stack
        self.registry = registry
        self.out = out

    def handle(self, line):
        '''
        Run the command named by line, if there is one.

        Returns True if line was a command.
        '''
        name = type(self).COMMANDS.get(line)
        if name is None:
            return False
        getattr(self, name)()
        return True

    def printhelp(self):
        '''
        Print all operators and what they do.
        '''
        print(self.registry.help(), file=self.out)

    def sortstack(self):
        self.stack.sort()

    def printfixed(self):
        '''
        Print the stack with fixed-point formatting.
        '''
        print(self.stack.render_fixed(), file=self.out)

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def revstack(self):
        '''
        Swap two elements at top of stack.
        '''
        self.stack.swap()

    def popstack(self):
        '''
        Pop and discard the element at top of stack.
        '''
        self.stack.pop()

    def quit(self):
        raise Quit()

    COMMANDS = {
        '?': 'printhelp',
        'h': 'printhelp',
        'he': 'printhelp',
        'hel': 'printhelp',
        'help': 'printhelp',
        'sort': 'sortstack',
        'f': 'printfixed',
        'cl': 'clrstack',
        'clr': 'clrstack',
        'clear': 'clrstack',
        'sw': 'revstack',
        'swap': 'revstack',
        'p': 'popstack',
        'pop': 'popstack',
        'q': 'quit',
        'exit': 'quit',
    }
