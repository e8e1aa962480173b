from functools import reduce
import operator

import regex

from .util import RPNError
from .model import CalculatorModel


class Lexer:
    '''
    Lexer for the command words of the shell.

    A line is a whitespace separated sequence of words. Each word is either a
    number, which becomes the accumulator, or a command. Nothing more: no
    expressions, no grouping.

    For consistency, needs to be instantiated, despite holding no internal
    state.
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
                  (?:
                      # 5, 25, 125_5
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
    # String formatting and regex is a tricky business, because of the braces.
    NUMBER = r'''
              [+-]?
              (?:
                  (?:
                      # 1, 1_200, 1_200. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                      |
                      # .2
                      \.
                      {FRACTIONAL}
                  )
                  {EXPONENT}?
                  |
                  inf
                  |
                  nan
              )
              '''.format(INTEGRAL=INTEGRAL,
                         FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)

    # Command word -> name of the CalculatorModel method it runs.
    COMMANDS = {
        'enter': 'push',
        'push': 'push',
        'pop': 'pop',
        'drop': 'drop',
        'dropall': 'drop_all',
        'clear-stack': 'drop_all',
        'swap': 'swap',
        'c': 'clear_accumulator',
        'clear': 'clear_accumulator',
        'add': 'add',
        'sub': 'sub',
        'mul': 'mul',
        'div': 'div',
    }
    COMMANDS.update((symbol, name)
                    for symbol, (name, _)
                    in CalculatorModel.OPERATORS.items())
    # Handled by the shell itself, not the model.
    HELP = ('?', 'help')

    # Longest first, so that 'clear-stack' isn't cut short.
    COMMAND = r'(?:' + r'|'.join(map(regex.escape,
                                     sorted([*COMMANDS, *HELP],
                                            key=len,
                                            reverse=True))) + r')'

    # All possible words.
    WORD = r'(?<number>' + NUMBER + r')|' \
           r'(?<command>' + COMMAND + r')'
    # Default regex flags for matching words
    FLAGS = reduce(operator.__or__,
                   {regex.IGNORECASE,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield a match for every word.

        Raises RPNError on the first unknown word; the words before it have
        already been yielded.
        '''
        for word in line.split():
            match = regex.fullmatch(type(self).WORD, word,
                                    flags=type(self).FLAGS)
            if match is None:
                raise RPNError('Unknown command {!r}'.format(word))
            yield match

    def matchedgroups(self, match):
        '''
        Return the matched groups of a word, by group name.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def ishelp(self, groups):
        return groups.get('command', '').lower() in type(self).HELP

    def target(self, groups):
        '''
        Return name of CalculatorModel method a word runs, if any.
        '''
        if 'number' in groups:
            return 'set_accumulator'
        elif 'command' in groups:
            return type(self).COMMANDS.get(groups['command'].lower())
