from pytest import Item, fixture

from rpncalc.model import CalculatorModel


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP -o enable_assertion_pass_hook=true.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


class Recorder:
    '''
    Listener remembering every notification it gets.
    '''
    def __init__(self):
        self.calls = []

    def __call__(self, accumulator, snapshot):
        self.calls.append((accumulator, snapshot))

    def __len__(self):
        return len(self.calls)

    @property
    def last(self):
        return self.calls[-1]


@fixture
def model():
    return CalculatorModel()


@fixture
def recorder(model):
    '''
    Recorder registered on the model fixture.
    '''
    listener = Recorder()
    model.add_listener(listener)
    return listener
