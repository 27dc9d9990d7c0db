from __future__ import annotations

from pathlib import Path

import pytest

from ktgate.config import KtlintSettings
from ktgate.runner import LinterRunner
from tests._fixtures.fake_process import FakeProcessRunner
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable build builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def fake_process() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def runner_factory(fake_process: FakeProcessRunner):
    def _factory(settings: KtlintSettings) -> LinterRunner:
        return LinterRunner(settings, runner=fake_process)

    return _factory
