from pathlib import Path

import pytest

from app.core.config import DEFAULT_CORS_ORIGINS, DEFAULT_UPLOAD_DIR, Settings
from app.core.errors import InputError, UserFacingError


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s.upload_dir == DEFAULT_UPLOAD_DIR
    assert s.max_images == 20
    assert s.max_image_bytes == 10 * 1024 * 1024
    assert s.keep_artifacts is False
    assert s.cors_allow_origins == DEFAULT_CORS_ORIGINS
    assert s.log_level == "INFO"


def test_values_from_env(tmp_path):
    s = Settings.from_env(
        {
            "UPLOAD_DIR": str(tmp_path),
            "MAX_IMAGES": "3",
            "MAX_IMAGE_BYTES": "2048",
            "KEEP_ARTIFACTS": "yes",
            "CORS_ALLOW_ORIGINS": "http://a.test, ,http://b.test",
            "LOG_LEVEL": "debug",
        }
    )
    assert s.upload_dir == Path(tmp_path)
    assert (s.max_images, s.max_image_bytes) == (3, 2048)
    assert s.keep_artifacts is True
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["0", "-4", "many"])
def test_bad_limits_are_rejected(value):
    with pytest.raises(ValueError):
        Settings.from_env({"MAX_IMAGES": value})


def test_user_facing_error_to_dict():
    err = UserFacingError(code="x", message="boom", details={"a": 1}, stage="upload")
    assert err.to_dict() == {"code": "x", "message": "boom", "stage": "upload", "details": {"a": 1}}
    assert str(err) == "boom"


def test_input_error_is_not_prefixed():
    err = InputError()
    assert err.message == "No images provided for PDF generation"
    assert err.to_dict() == {
        "code": "no_images",
        "message": "No images provided for PDF generation",
        "stage": "input",
    }
