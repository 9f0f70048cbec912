# conftest: ensure repo/src is importable in any CI working dir / interpreter
import os, sys, pathlib
ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root (tests/..)
CANDIDATES = [ROOT / "src", ROOT]
for p in CANDIDATES:
    sp = str(p)
    if sp not in sys.path:
        sys.path.insert(0, sp)

# keep unit runs independent of a developer's shell/.env
for k in ("TKTRANSLATE_SERVER_ADDR", "TKTRANSLATE_PROXY", "TKTRANSLATE_TIMEOUT",
          "TKTRANSLATE_RESULT_TTL", "TKTRANSLATE_CONFIG", "LOG_LEVEL"):
    os.environ.pop(k, None)

import pytest

from tests.fakes.fake_transport import ExplodingTransport, FakeTransport
from tktranslate.clients import TRANSLATE_CN_ADDR, default_client, new_client


class FakeClock:
    def __init__(self, t: float = 1_000_000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def exploding():
    return ExplodingTransport()


@pytest.fixture
def client(transport):
    return new_client(TRANSLATE_CN_ADDR, transport=transport)


@pytest.fixture(autouse=True)
def _reset_default_client():
    default_client.cache_clear()
    yield
    default_client.cache_clear()
