from pyparsely.Char import digits, letters, string
from pyparsely.Combinators import choice, many, sequence_of


class TimeMany:
    def setup(self):
        self.parser = many(string("a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_many_small(self):
        self.parser.run(self.small)

    def time_many_medium(self):
        self.parser.run(self.medium)

    def time_many_large(self):
        self.parser.run(self.large)


class TimeDiceList:
    def setup(self):
        roll = choice([sequence_of([digits, string("d"), digits]), letters])
        self.parser = many(sequence_of([roll, string(",")]))
        self.data = "2d6,abc," * 5000

    def time_dice_list(self):
        self.parser.run(self.data)
