import random
from datetime import datetime
from pathlib import Path

import pytest

from originality.config.settings import Settings
from originality.processor.processor import SubmissionProcessor, build_processor


@pytest.fixture
def uploads_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def integration_settings(uploads_root: Path) -> Settings:
    return Settings(
        _env_file=None,
        storage_base_path=uploads_root,
        plagiarism_api_provider="mock",
    )


@pytest.fixture
def processor(
    integration_settings: Settings, fixed_timestamp: datetime
) -> SubmissionProcessor:
    return build_processor(
        integration_settings,
        rng=random.Random(2024),
        clock=lambda: fixed_timestamp,
    )


@pytest.fixture
def fifty_word_essay() -> bytes:
    return " ".join(f"word{i}" for i in range(50)).encode("utf-8")
