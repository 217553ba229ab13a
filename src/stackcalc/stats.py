'''
Streaming statistics for the whole-stack aggregate operators.
'''

import math


class Welford:
    '''
    Welford's online mean/variance accumulator, with running min and max.

    Variance is the sample variance (n - 1 divisor). Min and max are nan
    once any value is nan, whatever the order.
    '''

    def __init__(self, values=()):
        self.count = 0
        self.mean = 0.0
        self._m2 = 0.0
        self.min = 0.0
        self.max = 0.0
        for value in values:
            self.add(value)

    def add(self, value):
        value = float(value)
        if self.count == 0 or math.isnan(value):
            self.min = self.max = value
        else:
            # once nan, always nan
            if value < self.min:
                self.min = value
            if value > self.max:
                self.max = value
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self._m2 += delta * (value - self.mean)

    def variance(self):
        if self.count < 2:
            return 0.0
        return self._m2 / (self.count - 1)

    def stddev(self):
        return math.sqrt(self.variance())
