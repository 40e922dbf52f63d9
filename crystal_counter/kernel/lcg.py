MASK32 = 0xFFFFFFFF
LCG_A = 1664525
LCG_C = 1013904223

class LCG:
    """
    Numerical Recipes LCG: state = (a * state + c) mod 2^32.
    Every draw returns the new state, never the seed itself.
    """
    def __init__(self, seed: int):
        self.state = int(seed) & MASK32

    def reseed(self, seed: int):
        self.state = int(seed) & MASK32

    def __call__(self) -> int:
        self.state = (LCG_A * self.state + LCG_C) & MASK32
        return self.state

    def draws(self, n: int):
        return [self() for _ in range(n)]
