from .lcg import LCG

class Snowflake:
    """
    One arm of a six-fold crystal; the other five arms are identical.
    genome = [arm_length, num_branches, pos1, len1, pos2, len2, ...]
    """
    def __init__(self, arm_length: int, branches):
        self.arm_length = int(arm_length)
        self.branches = [dict(pos=int(b["pos"]), len=int(b["len"])) for b in branches]

    @property
    def genome(self):
        flat = [self.arm_length, len(self.branches)]
        for b in self.branches:
            flat += [b["pos"], b["len"]]
        return flat

    def to_dict(self):
        return {"arm_length": self.arm_length, "branches": [dict(b) for b in self.branches], "genome": self.genome}

    def __eq__(self, other):
        return isinstance(other, Snowflake) and self.genome == other.genome

    def __repr__(self):
        return f"Snowflake(genome={self.genome})"

def seed_to_snowflake(seed: int) -> Snowflake:
    rng = LCG(seed)
    arm_length = (rng() % 6) + 2                      # 2..7
    num_branches = (rng() % 4) + 1                    # 1..4
    branches = []
    for _ in range(num_branches):
        pos = (rng() % max(1, arm_length - 1)) + 1    # 1..arm_length-1
        length = (rng() % 3) + 1                      # 1..3
        branches.append({"pos": pos, "len": length})
    # sorted() is stable: equal positions keep draw order
    branches = sorted(branches, key=lambda b: b["pos"])
    return Snowflake(arm_length, branches)
