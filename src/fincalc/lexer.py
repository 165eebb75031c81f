from functools import reduce
import operator

import regex

from .util import FinCalcError, wrap_user_errors
from .number import Number
from .registry import REGISTRY


class Lexer:
    '''
    Lexer for postfix calculator programs.

    Whitespace separated decimal literals and operation spellings; every
    spelling registered at construction time is recognised.
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
                        # Thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      |
                      (?:
                          \d{3}
                          (?:
                              _\d{3}
                          )*
                          (?:
                              _\d{1,2}
                          )?
                      )
                  )
                  '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              -?
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
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)
    SPACE = r'\s+'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, registry=REGISTRY):
        self.registry = registry
        # POSIX matching is leftmost longest, so 1/x and 10^x beat the
        # numbers they start with, and EXP10 beats EXP.
        self.OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                               registry.symbols())) + r')'
        self.LEXEME = r'(?<number>' + self.NUMBER + r')|' \
                      r'(?<operator>' + self.OPERATOR + r')|' \
                      r'(?<space>' + self.SPACE + r')'
        self.pattern = regex.compile(self.LEXEME, flags=self.FLAGS)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Doesn't yield incomplete or incorrect lexemes, stopping on first bad.
        '''
        while line:
            match = self.pattern.match(line)
            if match is None or not match.group(0):
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise FinCalcError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme belongs in a program.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the named groups that matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    @wrap_user_errors("Can't parse {1}")
    def parse(self, groups):
        '''
        Turn matched groups into a stack item.
        '''
        if 'number' in groups:
            return Number.of(groups['number'].replace('_', ''))
        elif 'operator' in groups:
            return self.registry.lookup(groups['operator'])
        raise FinCalcError("Can't parse {}".format(groups))

    def program(self, line):
        '''
        Whole line as a program: its Numbers and Operations, in order.
        '''
        return [self.parse(self.matchedgroups(match))
                for match
                in self.lex(line)
                if self.isfeedable(match)]
