import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import RPNError, wrap_user_errors
from .model import CalculatorModel
from .lexer import Lexer


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, rprompt=None):
        self.prompt = prompt
        self.rprompt = rprompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Stack depth
                                    rprompt=self.rprompt,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the RPN calculator.
    '''

    DEFAULT_PROMPT = '> '
    LOG_FORMAT = '%(name)s: %(levelname)s: %(message)s'

    def dumper(self):
        '''
        Dump every word with its kind and the operation it maps to.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(word)>\t<operation>')
        for line in self._lines():
            try:
                for match in lexer.lex(line):
                    groups = lexer.matchedgroups(match)
                    operation = 'help' if lexer.ishelp(groups) else \
                        lexer.target(groups)
                    print(*groups.keys(),
                          repr(match.group(0)),
                          operation,
                          sep='\t')
            except RPNError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run calculator over all input lines.
        '''
        self.model = CalculatorModel()
        if not self.args.quiet:
            self.model.add_listener(self.show)
        lines = self._lines()
        if isinstance(lines, InteractiveInput):
            lines.rprompt = lambda: '[{}]'.format(len(self.model))
        lexer = Lexer()
        for line in lines:
            try:
                for match in lexer.lex(line):
                    self.feed(lexer, lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                logger.debug('Aborted line %r', line, exc_info=True)
                print(e.args[0], file=sys.stderr)

    def feed(self, lexer, groups):
        '''
        Run a single word on the model.
        '''
        if lexer.ishelp(groups):
            return self.printhelp()
        operation = lexer.target(groups)
        if operation == 'set_accumulator':
            self.model.set_accumulator(self._iconvert(groups['number']))
        else:
            getattr(self.model, operation)()

    @wrap_user_errors('Cannot convert {1}')
    def _iconvert(self, number):
        '''
        Convert number word to a float.
        '''
        return float(number.replace('_', ''))

    def show(self, accumulator, snapshot):
        '''
        Print the stack, top last, then the accumulator.
        '''
        for level, value in reversed(list(enumerate(snapshot, 1))):
            print('{}: {}'.format(level, value))
        print('=', accumulator, flush=True)

    def printhelp(self):
        '''
        Print all possible commands.
        '''
        print('commands:', *sorted(Lexer.COMMANDS), file=sys.stderr)
        print('help:', *Lexer.HELP, file=sys.stderr)
        print('numbers set the accumulator', file=sys.stderr)

    def raw_grammar(self):
        '''
        Print current internally defined word grammar.
        '''
        print(Lexer.WORD)

    def _lines(self):
        '''
        Return input lines, prompting for them if need be.

        Prompts if either:
        - prompt explicitly specified.
        - input is stdin, and both stdin/out are a tty
        '''
        if self.args.prompt:
            return InteractiveInput(prompt=self.args.prompt)
        if self.args.expressions is not None:
            return self.args.expressions
        if sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.DEFAULT_PROMPT)
        return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='debug logging, with '
                                               'tracebacks on bad input')
        self.argument_parser.add_argument('-q', '--quiet',
                                          action='store_true',
                                          help="don't print state on change")
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            stream=sys.stderr,
            format=self.LOG_FORMAT,
            level=logging.DEBUG if self.args.verbose else logging.WARNING)
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
