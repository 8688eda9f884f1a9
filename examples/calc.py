from simplecli import handle


class Calc:
    # positional arguments are always parsed in base 10; 'base' only tells the
    # operations how to reread their digits.
    base: int = 10
    verbose: bool = False

    def _rebase(self, number):
        return int(str(number), self.base)

    def add(self, x: int, y: int):
        """add two numbers."""
        x, y = self._rebase(x), self._rebase(y)
        if self.verbose:
            print("%d + %d = " % (x, y), end="")
        print(x + y)

    def multiply(self, x: int, y: int):
        """multiply two numbers."""
        x, y = self._rebase(x), self._rebase(y)
        if self.verbose:
            print("%d * %d = " % (x, y), end="")
        print(x * y)


if __name__ == '__main__':
    handle(Calc())
