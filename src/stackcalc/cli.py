from os import environ, makedirs, path
from argparse import ArgumentParser
import logging
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory

from .cascade import Cascade
from .commands import Quit
from .util import RPNError


logger = logging.getLogger(__name__)


def history_file(dirname='stackcalc', filename='history', env=environ):
    '''
    Per-user history file, under $XDG_STATE_HOME or ~/.local/state.
    '''
    state = env.get('XDG_STATE_HOME') or \
        path.join(path.expanduser('~'), '.local', 'state')
    return path.join(state, dirname, filename)


def open_history(filename, out=None):
    '''
    File history at filename, or in-memory history if its directory can't
    be created.
    '''
    if filename is None:
        return InMemoryHistory()
    dirname = path.dirname(filename)
    try:
        makedirs(dirname, mode=0o750, exist_ok=True)
    except OSError as e:
        logger.debug('cannot create %s: %s', dirname, e)
        print('history disabled due to inability to create directory:',
              dirname, file=out)
        return InMemoryHistory()
    return FileHistory(filename)


class LineReader:
    '''
    Line editing and history, one cleaned-up line at a time.
    '''

    def __init__(self, history=None, vi_mode=False, session=None):
        if session is None:
            session = PromptSession(history=history or InMemoryHistory(),
                                    vi_mode=vi_mode,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
        self.session = session

    def read_line(self, prompt):
        '''
        Prompt for a line, without commas or surrounding whitespace, so
        1,234 reads as 1234.

        Raises EOFError on Ctrl-D, KeyboardInterrupt on Ctrl-C.
        '''
        if self.session is None:
            raise EOFError('reader closed')
        line = self.session.prompt(prompt)
        return line.replace(',', '').strip()

    def close(self):
        self.session = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class CLI:
    '''
    Command line interface to the calculator.
    '''

    PROMPT_SUFFIX = '> '
    HISTORY_DIRNAME = 'stackcalc'
    HISTORY_FILENAME = 'history'

    def __init__(self, out=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.out = out
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log each line and show '
                                               'stack traces on errors')
        self.argument_parser.add_argument('--vi', action='store_true',
                                          dest='vi_mode',
                                          help='vi line editing')
        history = self.argument_parser.add_mutually_exclusive_group()
        history.add_argument('--history', metavar='FILE',
                             default=history_file(self.HISTORY_DIRNAME,
                                                  self.HISTORY_FILENAME),
                             help='history file (default: %(default)s)')
        history.add_argument('--no-history', action='store_const',
                             const=None, dest='history',
                             help="don't keep history")

    def prompt(self, stack):
        return stack.render() + self.PROMPT_SUFFIX

    def repl(self, cascade, reader):
        '''
        Feed lines to cascade until quit or end of input.
        '''
        while True:
            try:
                line = reader.read_line(self.prompt(cascade.stack))
            except (EOFError, KeyboardInterrupt):
                # Ctrl-D, Ctrl-C: normal exit
                return
            try:
                cascade.feed(line)
            except Quit:
                return
            except RPNError as e:
                print(e.args[0], file=self.out)
                if self.args.verbose:
                    traceback.print_exc()

    def run(self, *, args=None, reader=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Returns the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        if reader is None:
            reader = LineReader(open_history(self.args.history, out=self.out),
                                vi_mode=self.args.vi_mode)
        cascade = Cascade(out=self.out)
        with reader:
            self.repl(cascade, reader)
        return 0


def main():
    return CLI().run()
