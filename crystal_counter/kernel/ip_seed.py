import re

FNV_OFFSET = 2166136261
FNV_PRIME = 16777619
MASK32 = 0xFFFFFFFF

_OCTET = re.compile(r"[0-9]+")

def _utf16_units(text: str):
    # char codes as a browser sees them: astral chars become surrogate pairs
    for ch in text:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            yield 0xD800 + (cp >> 10)
            yield 0xDC00 + (cp & 0x3FF)
        else:
            yield cp

def fnv1a32(text: str) -> int:
    h = FNV_OFFSET
    for code in _utf16_units(text):
        h ^= code
        h = (h * FNV_PRIME) & MASK32
    return h

def _ipv4_octets(ip: str):
    parts = ip.split(".")
    if len(parts) != 4 or not all(_OCTET.fullmatch(p) for p in parts):
        return None
    octets = [int(p) for p in parts]
    if any(o > 255 for o in octets):
        return None
    return octets

def normalize_ip(ip: str) -> str:
    ip = (ip or "").strip()
    if ip.startswith("["):
        ip = ip[1:]
    if ip.endswith("]"):
        ip = ip[:-1]
    return ip.strip()

def ip_to_seed(ip: str) -> int:
    """
    Address string -> 32-bit unsigned seed.
    Dotted-quad IPv4 is packed big-endian; anything else (IPv6, garbage)
    goes through FNV-1a.
    """
    ip = normalize_ip(ip)
    if "." in ip:
        octets = _ipv4_octets(ip)
        if octets:
            o0, o1, o2, o3 = octets
            return (o0 << 24) | (o1 << 16) | (o2 << 8) | o3
    return fnv1a32(ip)
