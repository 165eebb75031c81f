from os import isatty
from sys import stdin, stdout, exit
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import FinCalcError
from .number import (Number, DEFAULT_PRECISION, DEFAULT_ROUNDING,
                     RoundingMode, set_precision, set_rounding_mode)
from .operation import Operation
from .registry import REGISTRY
from .evaluator import evaluate
from .lexer import Lexer

logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    Every input line is one program; its terminal stack is printed, bottom
    first, one item per line.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexemes matches, parse, and arity.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<arity>')
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    groups = lexer.matchedgroups(match)
                    if not lexer.isfeedable(match):
                        continue
                    parsed = lexer.parse(groups)
                    print(*groups.keys(),
                          repr(match.group(0)),
                          parsed.arity if isinstance(parsed, Operation) else 0,
                          sep='\t')
            except FinCalcError as e:
                self._report(e)

    def executor(self):
        '''
        Run each line as a program.
        '''
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                program = lexer.program(line)
            # Abort entire rest of line, makes sense anyway
            except FinCalcError as e:
                self._report(e)
                continue
            if not program:
                continue
            for item in evaluate(program):
                print(self.render(item))

    def lister(self):
        '''
        List operations by category.
        '''
        for category, ops in REGISTRY.by_category().items():
            print(category)
            for op in ops:
                print('', op.symbol, op.name, op.description, sep='\t')

    def helper(self):
        '''
        Describe one operation: what it does, its operands, an example.
        '''
        try:
            op = REGISTRY.lookup(self.args.help_op)
        except FinCalcError as e:
            self._report(e)
            exit(2)
        print('{} ({}): {}'.format(op.symbol, op.name, op.description))
        if op.aliases:
            print('Also:', *op.aliases)
        print('Operands, bottom of the stack first:')
        for number, operand in enumerate(op.operands, 1):
            print('  {}. {}: {}'.format(number, operand.name,
                                        operand.description))
        if op.example:
            print('Example:', op.example)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    @staticmethod
    def render(item):
        if isinstance(item, Number):
            return item.format()
        return str(item)

    def _report(self, e):
        if self.args.verbose:
            logger.debug('User error', exc_info=e)
        print(e.args[0], file=sys.stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(
                prompt=self.args.prompt or self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Financial and scientific RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument(
            '-k', '--precision',
            type=int,
            default=DEFAULT_PRECISION,
            help='decimal places shown, and kept by division '
                 '(default: %(default)s)')
        self.argument_parser.add_argument(
            '-r', '--rounding',
            default=DEFAULT_ROUNDING.name,
            help='one of {} (default: %(default)s)'.format(
                ', '.join(mode.name for mode in RoundingMode)))
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
                                      ('-D', '--dump', self.dumper),
                                      ('-l', '--list', self.lister)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        main_groups.add_argument('-H', '--help-op',
                                 metavar='SYMBOL',
                                 help='describe one operation')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def _configure(self):
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING)
        try:
            set_precision(self.args.precision)
            set_rounding_mode(self.args.rounding)
        except (FinCalcError, ValueError) as e:
            self.argument_parser.error(str(e))

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        self._configure()
        if self.args.help_op is not None:
            self.args.action = self.helper
        # Only the line-driven actions read input.
        if self.args.action in (self.executor, self.dumper) and \
           self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)


def main():
    CLI().run()
