from .lcg import LCG, MASK32

GENOME_HASH_INIT = 0xDEADBEEF

class CubeState:
    """
    Cubie-level 3x3 state: corner/edge permutations plus orientations.
    A physically reachable cube needs
      sum(co) % 3 == 0, sum(eo) % 2 == 0, parity(corners) == parity(edges).
    """
    def __init__(self, corners, co, edges, eo):
        self.corners = list(corners)
        self.co = list(co)
        self.edges = list(edges)
        self.eo = list(eo)

    def is_valid(self) -> bool:
        return (
            sorted(self.corners) == list(range(8))
            and sorted(self.edges) == list(range(12))
            and len(self.co) == 8 and len(self.eo) == 12
            and all(o in (0, 1, 2) for o in self.co)
            and all(o in (0, 1) for o in self.eo)
            and sum(self.co) % 3 == 0
            and sum(self.eo) % 2 == 0
            and (perm_parity(self.corners) + perm_parity(self.edges)) % 2 == 0
        )

    def to_dict(self):
        return {"corners": list(self.corners), "co": list(self.co), "edges": list(self.edges), "eo": list(self.eo)}

    def __eq__(self, other):
        return isinstance(other, CubeState) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"CubeState({self.to_dict()})"

def perm_parity(perm) -> int:
    # number of even-length cycles, mod 2
    seen = [False] * len(perm)
    p = 0
    for i in range(len(perm)):
        if seen[i]:
            continue
        n, j = 0, i
        while not seen[j]:
            seen[j] = True
            j = perm[j]
            n += 1
        if n % 2 == 0:
            p += 1
    return p % 2

def shuffle(arr, rng):
    for i in range(len(arr) - 1, 0, -1):
        j = rng() % (i + 1)
        arr[i], arr[j] = arr[j], arr[i]

def genome_seed(genome) -> int:
    h = GENOME_HASH_INIT
    for v in genome:
        h = (h * 31 + v) & MASK32
    return h

def snowflake_to_cube(snowflake) -> CubeState:
    rng = LCG(genome_seed(snowflake.genome))

    corners = list(range(8))
    shuffle(corners, rng)

    co = [rng() % 3 for _ in range(7)]
    co.append((3 - sum(co) % 3) % 3)

    edges = list(range(12))
    shuffle(edges, rng)

    if (perm_parity(corners) + perm_parity(edges)) % 2:
        edges[10], edges[11] = edges[11], edges[10]

    eo = [rng() % 2 for _ in range(11)]
    eo.append(sum(eo) % 2)

    return CubeState(corners, co, edges, eo)
