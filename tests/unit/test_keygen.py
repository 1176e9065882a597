"""
Unit tests for the development key generator.
"""

from __future__ import annotations

import pytest

from todo_api.keygen import PRIVATE_KEY_NAME, PUBLIC_KEY_NAME, main, write_key_pair
from todo_api.tokens import create_token, verify_token

pytestmark = pytest.mark.unit


def test_write_key_pair_creates_usable_keys(tmp_path):
    """Test that generated keys can sign and verify a token."""
    # Act
    private_path, public_path = write_key_pair(tmp_path / "keys")

    # Assert
    token = create_token(
        user_id=1, username="alice", private_key=private_path.read_text(encoding="utf-8")
    )
    payload = verify_token(token, public_path.read_text(encoding="utf-8"))
    assert payload is not None
    assert payload["username"] == "alice"


def test_write_key_pair_skips_when_both_files_exist(tmp_path):
    """Test that existing keys are never overwritten."""
    # Arrange
    write_key_pair(tmp_path)
    original = (tmp_path / PRIVATE_KEY_NAME).read_text(encoding="utf-8")

    # Act
    result = write_key_pair(tmp_path)

    # Assert
    assert result is None
    assert (tmp_path / PRIVATE_KEY_NAME).read_text(encoding="utf-8") == original


def test_write_key_pair_refuses_partial_pair(tmp_path):
    """Test that a lone key file is reported instead of silently replaced."""
    # Arrange
    (tmp_path / PUBLIC_KEY_NAME).write_text("stale", encoding="utf-8")

    # Act & Assert
    with pytest.raises(SystemExit):
        write_key_pair(tmp_path)


def test_main_reports_generated_paths(tmp_path, capsys):
    """Test the console entry point output for a fresh and a repeated run."""
    # Act
    first_exit = main([str(tmp_path)])
    first_output = capsys.readouterr().out
    second_exit = main([str(tmp_path)])
    second_output = capsys.readouterr().out

    # Assert
    assert first_exit == second_exit == 0
    assert f"Generated: {tmp_path / PRIVATE_KEY_NAME}" in first_output
    assert "JWT_PRIVATE_KEY_PATH=" in first_output
    assert "Keys already exist" in second_output
