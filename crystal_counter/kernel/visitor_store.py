import json, logging, os, tempfile, threading

from .anonymizer import anonymize_ip, looks_like_raw_ip, visitor_record
from .crystal_art import draw_snowflake

log = logging.getLogger(__name__)

TMP_PREFIX = ".visitors-"

class StoreError(RuntimeError):
    pass

def empty_document() -> dict:
    return {"count": 0, "visitors": []}

def migrate_if_needed(data: dict) -> dict:
    """
    Old format {count, ips: [str]} -> {count, visitors: [{id, crystal}]}.
    Raw addresses still in the old list are anonymized now; digit-only
    entries were anonymized before crystals existed and get an empty one.
    """
    if isinstance(data.get("visitors"), list) or not isinstance(data.get("ips"), list):
        return data
    visitors = []
    for entry in data["ips"]:
        entry = str(entry)
        if looks_like_raw_ip(entry):
            visitors.append(visitor_record(entry))
        else:
            visitors.append({"id": entry, "crystal": ""})
    log.info("migrated %d legacy entries to visitor records", len(visitors))
    return {"count": int(data.get("count", len(visitors))), "visitors": visitors}

def visitors_view(data: dict):
    if isinstance(data.get("visitors"), list):
        return list(data["visitors"])
    return [{"id": str(ip), "crystal": ""} for ip in data.get("ips") or []]

class VisitorStore:
    """
    Single JSON document on disk:
      {"count": int, "visitors": [{"id": str, "crystal": str}, ...]}
    """
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def load(self) -> dict:
        if not os.path.isfile(self.path):
            return empty_document()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("unreadable visitor store %s (%s); starting empty", self.path, e)
            return empty_document()
        if not isinstance(data, dict):
            log.warning("visitor store %s is not an object; starting empty", self.path)
            return empty_document()
        if isinstance(data.get("visitors"), list):
            data["visitors"] = [v for v in data["visitors"] if isinstance(v, dict)]
            entries = data["visitors"]
        elif isinstance(data.get("ips"), list):
            data.pop("visitors", None)
            entries = data["ips"]
        else:
            log.warning("visitor store %s has no visitor list; starting empty", self.path)
            return empty_document()
        count = data.get("count")
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            data["count"] = len(entries)
        return data

    def save(self, data: dict) -> str:
        folder = os.path.dirname(os.path.abspath(self.path))
        tmp = None
        try:
            os.makedirs(folder, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=TMP_PREFIX, suffix=".json", dir=folder)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
            tmp = None
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"cannot write visitor store {self.path}: {e}") from e
        finally:
            # leftover temp file when dump or replace failed
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)
        return self.path

    def record(self, ip: str):
        """Count ip once. Returns (count, is_new)."""
        enc = anonymize_ip(ip)
        uid = enc["anonymized_id"]
        with self._lock:
            raw = self.load()
            data = migrate_if_needed(raw)
            migrated = data is not raw
            if any(v.get("id") == uid for v in data["visitors"]):
                if migrated:
                    self.save(data)
                return data["count"], False
            data["visitors"].append({"id": uid, "crystal": draw_snowflake(enc["snowflake"])})
            data["count"] = int(data.get("count", 0)) + 1
            self.save(data)
        log.info("new visitor %s (count=%d)", uid, data["count"])
        return data["count"], True

    def snapshot(self) -> dict:
        data = self.load()
        return {"count": int(data.get("count", 0)), "visitors": visitors_view(data)}
