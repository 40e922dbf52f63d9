import os

# relative to the working directory, like the state file the service writes
DEFAULT_DATA_FILE = "data.json"
DEFAULT_IP_HEADER = "X-Nf-Client-Connection-Ip"
DEFAULT_PORT = 5000

def get_data_file() -> str:
    return os.getenv("CRYSTAL_COUNTER_DATA_FILE", "").strip() or DEFAULT_DATA_FILE

def get_ip_header() -> str:
    return os.getenv("CRYSTAL_COUNTER_IP_HEADER", "").strip() or DEFAULT_IP_HEADER

def get_port() -> int:
    raw = os.getenv("CRYSTAL_COUNTER_PORT", "").strip()
    try:
        return int(raw) if raw else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT
