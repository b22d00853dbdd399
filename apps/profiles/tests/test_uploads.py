"""Tests for profile photo validation."""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.profiles.uploads import (
    MAX_IMAGE_SIZE,
    PhotoValidationError,
    sniff_image_format,
    validate_photo,
)
from conftest import make_image


class TestValidatePhoto:

    @pytest.mark.parametrize(
        "name, fmt, content_type",
        [
            ("a.png", "PNG", "image/png"),
            ("a.jpg", "JPEG", "image/jpeg"),
            ("a.gif", "GIF", "image/gif"),
            ("a.webp", "WEBP", "image/webp"),
        ],
    )
    def test_accepts_supported_formats(self, name, fmt, content_type):
        upload = make_image(name, fmt, content_type)
        assert validate_photo(upload) is upload

    def test_rejects_non_image_content_type(self):
        upload = SimpleUploadedFile("cv.pdf", b"%PDF-1.4", content_type="application/pdf")
        with pytest.raises(PhotoValidationError, match="Unsupported file type"):
            validate_photo(upload)

    def test_rejects_oversize(self):
        upload = make_image()
        upload.size = MAX_IMAGE_SIZE + 1
        with pytest.raises(PhotoValidationError, match="exceeds"):
            validate_photo(upload)

    def test_rejects_fake_image_bytes(self):
        upload = SimpleUploadedFile("evil.png", b"not really a png", content_type="image/png")
        with pytest.raises(PhotoValidationError, match="not a valid image"):
            validate_photo(upload)

    def test_rejects_mismatched_format(self):
        upload = make_image("a.bmp", "BMP", "image/png")
        with pytest.raises(PhotoValidationError, match="BMP"):
            validate_photo(upload)


class TestSniffImageFormat:

    def test_rewinds_file(self):
        upload = make_image()
        upload.read(4)
        assert sniff_image_format(upload) == "PNG"
        assert upload.tell() == 0
