import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from common.file_utils import append_line_to_file, file_contains_line


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


def test_file_contains_line_missing_file(tmp_path):
    assert file_contains_line(tmp_path / "nope", "anything") is False


def test_file_contains_line_ignores_trailing_whitespace(tmp_path):
    target = tmp_path / ".bashrc"
    target.write_text('alias ll="ls -l"\nexport PATH="$HOME/.local/bin:$PATH"   \n')

    assert file_contains_line(target, 'export PATH="$HOME/.local/bin:$PATH"') is True
    assert file_contains_line(target, 'export PATH="$HOME/.cargo/bin:$PATH"') is False


def test_append_creates_file_and_appends(app_settings, mock_logger):
    profile = app_settings.shell_profile_path

    assert append_line_to_file(profile, "first", app_settings, current_logger=mock_logger) is True
    assert append_line_to_file(profile, "second", app_settings, current_logger=mock_logger) is True

    assert profile.read_text() == "first\nsecond\n"


def test_append_repeats_by_default(app_settings, mock_logger):
    profile = app_settings.shell_profile_path

    append_line_to_file(profile, "same", app_settings, current_logger=mock_logger)
    append_line_to_file(profile, "same", app_settings, current_logger=mock_logger)

    assert profile.read_text().splitlines() == ["same", "same"]


def test_append_skips_existing_line_when_deduplicating(app_settings, mock_logger):
    settings = app_settings.model_copy(update={"deduplicate_appends": True})
    profile = settings.shell_profile_path
    profile.write_text("same\n")

    assert append_line_to_file(profile, "same", settings, current_logger=mock_logger) is False
    assert profile.read_text() == "same\n"


def test_elevated_append_goes_through_sudo_tee(fake_host, app_settings, mock_logger):
    target = app_settings.source_list_path("docker")

    append_line_to_file(
        target, "deb [arch=amd64] https://example.com jammy stable",
        app_settings, elevated=True, current_logger=mock_logger,
    )

    assert fake_host.calls[-1] == ["sudo", "tee", "-a", str(target)]
    assert fake_host.inputs[-1] == "deb [arch=amd64] https://example.com jammy stable\n"
    assert target.read_text() == "deb [arch=amd64] https://example.com jammy stable\n"


def test_elevated_append_failure_propagates(fake_host, app_settings, mock_logger):
    fake_host.respond(["tee"], returncode=1)

    with pytest.raises(subprocess.CalledProcessError):
        append_line_to_file(
            app_settings.source_list_path("docker"), "deb x", app_settings,
            elevated=True, current_logger=mock_logger,
        )
