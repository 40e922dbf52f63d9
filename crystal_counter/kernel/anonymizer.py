"""
IP -> seed -> snowflake -> cube state -> unique id.

Same address, same id; the address cannot be read back out of it.
"""

from .ip_seed import ip_to_seed
from .snowflake import seed_to_snowflake
from .cube_state import snowflake_to_cube
from .state_codec import cube_state_to_number
from .crystal_art import draw_snowflake

def anonymize_ip(ip: str) -> dict:
    snowflake = seed_to_snowflake(ip_to_seed(ip))
    cube_state = snowflake_to_cube(snowflake)
    uid = cube_state_to_number(cube_state)
    return {"anonymized_id": str(uid), "snowflake": snowflake, "cube_state": cube_state}

def visitor_record(ip: str) -> dict:
    enc = anonymize_ip(ip)
    return {"id": enc["anonymized_id"], "crystal": draw_snowflake(enc["snowflake"])}

def looks_like_raw_ip(entry: str) -> bool:
    return "." in entry or ":" in entry
