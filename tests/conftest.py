import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lms.core.config import LMSConfig
from lms.main import LMSPlatform
from lms.services import LMSContext, Session


@pytest.fixture
def config() -> LMSConfig:
    return LMSConfig()


@pytest.fixture
def context(config: LMSConfig) -> LMSContext:
    """Fresh seeded context: Mathematics (teacher1) and Physics (teacher2)."""
    return LMSPlatform(config).context


@pytest.fixture
def empty_context() -> LMSContext:
    return LMSContext(config=LMSConfig(seed_sample_data=False))


@pytest.fixture
def session(context: LMSContext) -> Session:
    return Session(context)


@pytest.fixture
def admin(session: Session):
    return session.login("admin1@example.com", "adminpass")


@pytest.fixture
def teacher(context: LMSContext):
    return Session(context).login("teacher1@example.com", "teacherpass")
