import json
import logging

from tktranslate.utils.structured_log import JsonFormatter, get_logger, setup_logging


def _record(msg="hello %s", args=("world",), **extra):
    rec = logging.LogRecord("tktranslate.test", logging.WARNING, "/x/y/mod.py", 12, msg, args, None, func="fn")
    for k, v in extra.items():
        setattr(rec, k, v)
    return rec


def test_json_formatter_base_fields():
    out = json.loads(JsonFormatter().format(_record()))
    assert out["msg"] == "hello world"
    assert out["level"] == "WARNING"
    assert out["logger"] == "tktranslate.test"
    assert out["file"] == "mod.py" and out["lineno"] == 12 and out["func"] == "fn"
    assert out["ts"].endswith("Z")
    # stdlib record attributes are not leaked as extras
    assert "args" not in out and "levelno" not in out


def test_json_formatter_extras_and_unserializable():
    out = json.loads(JsonFormatter().format(_record(stage="tkk", addr="http://translate.google.cn", obj=object())))
    assert out["stage"] == "tkk"
    assert out["addr"] == "http://translate.google.cn"
    assert out["obj"].startswith("<object object")


def test_json_formatter_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        rec = logging.LogRecord("t", logging.ERROR, "f.py", 1, "failed", (), sys.exc_info())
    out = json.loads(JsonFormatter().format(rec))
    assert "RuntimeError: boom" in out["exc"]


def test_setup_logging_to_file(tmp_path):
    logfile = tmp_path / "out.log"
    log = setup_logging("DEBUG", logfile=str(logfile))
    try:
        assert log.name == "tktranslate" and log.level == logging.DEBUG
        get_logger("tktranslate.clients.x").debug("tkk refreshed | addr=%s", "a")
        for h in log.handlers:
            h.flush()
        line = json.loads(logfile.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert line["msg"] == "tkk refreshed | addr=a"
    finally:
        for h in list(log.handlers):
            h.close()
            log.removeHandler(h)
        log.propagate = True


def test_setup_logging_plain_replaces_handlers():
    log = setup_logging("info", json_output=False)
    log = setup_logging("info", json_output=False)
    try:
        assert len(log.handlers) == 1
        assert not isinstance(log.handlers[0].formatter, JsonFormatter)
    finally:
        for h in list(log.handlers):
            log.removeHandler(h)
        log.propagate = True
