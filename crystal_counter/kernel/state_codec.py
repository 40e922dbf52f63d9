"""
Cube state <-> unique integer.

Each permutation is ranked by its Lehmer code (factorial number system,
remove-as-you-go); each orientation array contributes its free digits as a
mixed-radix number. The four indices pack into one Python int:

    uid = ((cp * 3^7 + co) * 12! + ep) * 2^11 + eo

Range: 0 .. 8! * 3^7 * 12! * 2^11 - 1 (about 8.86e19, past 64 bits).
"""

from .cube_state import CubeState

def _factorials(n: int):
    out = [1]
    for i in range(1, n + 1):
        out.append(out[-1] * i)
    return tuple(out)

FACTORIALS = _factorials(12)

CP_RADIX = FACTORIALS[8]       # 40320
CO_RADIX = 3 ** 7              # 2187
EP_RADIX = FACTORIALS[12]      # 479001600
EO_RADIX = 2 ** 11             # 2048
ID_SPACE = CP_RADIX * CO_RADIX * EP_RADIX * EO_RADIX
MAX_ID = ID_SPACE - 1

def lehmer(perm) -> int:
    n = len(perm)
    avail = list(range(n))
    idx = 0
    for i, v in enumerate(perm):
        rank = avail.index(v)
        idx += rank * FACTORIALS[n - 1 - i]
        del avail[rank]
    return idx

def lehmer_decode(index: int, n: int):
    if not 0 <= index < FACTORIALS[n]:
        raise ValueError(f"lehmer index {index} out of range for n={n}")
    avail = list(range(n))
    perm = []
    for i in range(n):
        rank, index = divmod(index, FACTORIALS[n - 1 - i])
        perm.append(avail.pop(rank))
    return perm

def digits_to_int(digits, base: int) -> int:
    v = 0
    for d in digits:
        v = v * base + d
    return v

def cube_state_to_indices(state: CubeState):
    return (
        lehmer(state.corners),
        digits_to_int(state.co[:7], 3),
        lehmer(state.edges),
        digits_to_int(state.eo[:11], 2),
    )

def cube_state_to_number(state: CubeState) -> int:
    cp, co, ep, eo = cube_state_to_indices(state)
    return ((cp * CO_RADIX + co) * EP_RADIX + ep) * EO_RADIX + eo

def number_to_indices(uid: int):
    if not 0 <= uid <= MAX_ID:
        raise ValueError(f"id {uid} outside [0, {MAX_ID}]")
    rest, eo = divmod(uid, EO_RADIX)
    rest, ep = divmod(rest, EP_RADIX)
    cp, co = divmod(rest, CO_RADIX)
    return cp, co, ep, eo
