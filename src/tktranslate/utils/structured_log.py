from __future__ import annotations
import json, logging, os, sys, datetime
from typing import Optional

# attributes every LogRecord carries; anything else came in through extra={}
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # base fields
        payload = {
            "ts": datetime.datetime.fromtimestamp(record.created, tz=datetime.timezone.utc)
                  .isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "pid": record.process,
        }
        # source hint
        if record.funcName: payload["func"] = record.funcName
        if record.lineno:   payload["lineno"] = record.lineno
        if record.pathname: payload["file"] = os.path.basename(record.pathname)
        # structured extras, e.g. extra={"addr": ..., "stage": ...}
        for k, v in record.__dict__.items():
            if k in _RESERVED or k in payload or k.startswith("_"):
                continue
            # keep only simple JSON-serializable
            try:
                json.dumps(v)
                payload[k] = v
            except (TypeError, ValueError):
                payload[k] = str(v)
        # exception info
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def setup_logging(level: str="INFO", logfile: Optional[str]=None, json_output: bool=True) -> logging.Logger:
    """Configure the `tktranslate` logger tree; returns that logger."""
    log = logging.getLogger("tktranslate")
    for h in list(log.handlers):
        log.removeHandler(h)
    log.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    handler = logging.FileHandler(logfile, encoding="utf-8") if logfile else logging.StreamHandler(sys.stderr)
    fmt = JsonFormatter() if json_output else logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
    handler.setFormatter(fmt)
    log.addHandler(handler)
    log.propagate = False
    return log

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
