"""Tests for concrete stages and mismatch handling."""

import base64
import logging
import warnings

import pytest

from patternkit.decorator.base import BaseComponent
from patternkit.decorator.stages import (
    CompressionStage,
    EncryptionStage,
    MarkerStage,
    TransformStage,
)
from patternkit.errors import (
    ConfigurationError,
    TransformMismatchError,
    TransformMismatchWarning,
)
from patternkit.protocol import IComponent


def b64encode(data):
    return base64.b64encode(data.encode("utf-8")).decode("ascii")


def b64decode(data):
    return base64.b64decode(data.encode("ascii"), validate=True).decode("utf-8")


class TestMarkerStage:
    """Tests for MarkerStage and its subclasses."""

    def test_forward(self, base):
        stage = MarkerStage(base, "TAG")
        assert stage.forward("x") == "[TAG]x[/TAG]"

    def test_inverse(self, base):
        stage = MarkerStage(base, "TAG")
        assert stage.inverse("[TAG]x[/TAG]") == "x"

    def test_write_then_read(self, base):
        stage = EncryptionStage(base)
        stage.write("Ok")
        assert base.payload == "[ENCRYPTED]Ok[/ENCRYPTED]"
        assert stage.read() == "Ok"

    def test_compression_markers(self, base):
        stage = CompressionStage(base)
        stage.write("Ok")
        assert base.payload == "[COMPRESSED]Ok[/COMPRESSED]"

    def test_bytes_round_trip(self, base):
        """Test bytes payloads get byte markers and come back as bytes."""
        stage = CompressionStage(EncryptionStage(base))
        stage.write(b"Ok")
        assert base.payload == b"[ENCRYPTED][COMPRESSED]Ok[/COMPRESSED][/ENCRYPTED]"
        assert stage.read() == b"Ok"

    def test_bytes_with_non_ascii_content(self, base):
        stage = EncryptionStage(base)
        stage.write(b"\x00\xff[/ENCRYPTED]")
        assert stage.read() == b"\x00\xff[/ENCRYPTED]"

    def test_unframed_bytes_is_mismatch(self, written):
        """Test bytes without the byte frame pass through as a mismatch."""
        stage = EncryptionStage(written(b"plain"))
        with pytest.warns(TransformMismatchWarning):
            assert stage.read() == b"plain"

    @pytest.mark.parametrize("payload", [42, None, ["Ok"], bytearray(b"Ok")])
    def test_unsupported_payload_rejected_on_write(self, base, payload):
        """Test payloads that cannot be framed fail before anything is stored."""
        stage = EncryptionStage(base)
        with pytest.raises(TypeError, match="can only frame str or bytes"):
            stage.write(payload)
        assert not base.written

    def test_names(self, base):
        assert EncryptionStage(base).name == "encrypted"
        assert CompressionStage(base).name == "compressed"

    def test_empty_tag_raises(self, base):
        with pytest.raises(ConfigurationError):
            MarkerStage(base, "")

    def test_stage_is_component(self, base):
        assert isinstance(EncryptionStage(base), IComponent)

    def test_inner_is_read_only(self, base):
        stage = EncryptionStage(base)
        with pytest.raises(AttributeError):
            stage.inner = BaseComponent()

    def test_wrapping_none_raises(self):
        with pytest.raises(ConfigurationError, match="needs an inner component"):
            EncryptionStage(None)

    def test_wrapping_non_component_raises(self):
        with pytest.raises(ConfigurationError, match="can only wrap"):
            EncryptionStage(object())


class TestMismatch:
    """Tests for the pass-through policy and its diagnostic hooks."""

    @pytest.mark.parametrize(
        "payload",
        [
            "plain",
            "[ENCRYPTED]missing close",
            "missing open[/ENCRYPTED]",
            "[COMPRESSED]x[/COMPRESSED]",
            "[ENCRYPTED]",
            42,
        ],
    )
    def test_passes_through_unchanged(self, payload, written):
        """Test payloads without the full frame come back unchanged."""
        stage = EncryptionStage(written(payload))
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", TransformMismatchWarning)
            assert stage.read() == payload

    def test_emits_warning(self, written):
        stage = EncryptionStage(written("plain"))
        with pytest.warns(TransformMismatchWarning, match="encrypted stage"):
            stage.read()

    def test_no_warning_on_match(self, base):
        stage = EncryptionStage(base)
        stage.write("Ok")
        with warnings.catch_warnings():
            warnings.simplefilter("error", TransformMismatchWarning)
            assert stage.read() == "Ok"

    def test_warning_as_error(self, written):
        """Test a test suite can turn mismatches into failures."""
        stage = EncryptionStage(written("plain"))
        with warnings.catch_warnings():
            warnings.simplefilter("error", TransformMismatchWarning)
            with pytest.raises(TransformMismatchWarning):
                stage.read()

    def test_logs_debug_record(self, caplog, written):
        stage = EncryptionStage(written("plain"))
        with caplog.at_level(logging.DEBUG, logger="patternkit.decorator.base"):
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", TransformMismatchWarning)
                stage.read()
        assert "cannot invert payload 'plain'" in caplog.text

    def test_callback(self, written):
        seen = []
        stage = EncryptionStage(
            written("plain"), on_mismatch=lambda s, data: seen.append((s.name, data))
        )
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", TransformMismatchWarning)
            assert stage.read() == "plain"
        assert seen == [("encrypted", "plain")]

    def test_non_callable_callback_raises(self, base):
        with pytest.raises(ConfigurationError, match="on_mismatch"):
            EncryptionStage(base, on_mismatch="log")

    def test_strict_raises(self, written):
        stage = EncryptionStage(written("plain"), strict=True)
        with pytest.raises(TransformMismatchError, match="encrypted stage"):
            stage.read()

    def test_strict_round_trip_still_works(self, base):
        stage = CompressionStage(EncryptionStage(base, strict=True), strict=True)
        stage.write("Ok")
        assert stage.read() == "Ok"

    def test_misordered_chain_degrades(self, base):
        """Test reading through a chain assembled differently from the writer."""
        writer = CompressionStage(EncryptionStage(base))
        writer.write("Ok")
        reader = EncryptionStage(CompressionStage(base))
        with pytest.warns(TransformMismatchWarning):
            value = reader.read()
        assert value == "[COMPRESSED]Ok[/COMPRESSED]"


class TestTransformStage:
    """Tests for TransformStage."""

    def test_round_trip(self, base):
        stage = TransformStage(base, "base64", b64encode, b64decode)
        stage.write("Ok")
        assert base.payload == "T2s="
        assert stage.read() == "Ok"

    def test_inverse_failure_is_mismatch(self, written):
        stage = TransformStage(written("not base64!"), "base64", b64encode, b64decode)
        with pytest.warns(TransformMismatchWarning, match="base64 stage"):
            assert stage.read() == "not base64!"

    def test_inverse_failure_strict(self, written):
        stage = TransformStage(
            written("not base64!"), "base64", b64encode, b64decode, strict=True
        )
        with pytest.raises(TransformMismatchError):
            stage.read()

    def test_empty_name_raises(self, base):
        with pytest.raises(ConfigurationError):
            TransformStage(base, "", str.upper, str.lower)

    def test_non_callable_raises(self, base):
        with pytest.raises(ConfigurationError, match="callable"):
            TransformStage(base, "x", "upper", str.lower)


class TestUnwrittenBase:
    """Reading a chain before anything was written to it."""

    def test_initial_payload_read_unchanged(self):
        stage = CompressionStage(EncryptionStage(BaseComponent("Data")))
        with warnings.catch_warnings():
            warnings.simplefilter("error", TransformMismatchWarning)
            assert stage.read() == "Data"

    def test_default_initial_payload(self):
        stage = EncryptionStage(BaseComponent(), strict=True)
        assert stage.read() == ""

    def test_written_flag(self, base):
        stage = EncryptionStage(base)
        assert not base.written
        assert not stage.written
        stage.write("Ok")
        assert base.written
        assert stage.written

    def test_inverse_applies_after_write(self, base):
        stage = EncryptionStage(base)
        stage.write("Ok")
        assert stage.read() == "Ok"

    def test_duck_typed_inner_counts_as_written(self):
        """Test components without a written flag are always inverted."""

        class PlainFile:
            def __init__(self):
                self.data = "plain"

            def write(self, data):
                self.data = data

            def read(self):
                return self.data

        stage = EncryptionStage(PlainFile())
        with pytest.warns(TransformMismatchWarning):
            assert stage.read() == "plain"
