"""Bundle emission and terminal reporting."""

from .bundle import render_bundle, serialize_bundle, write_bundle
from .stdout import BuildReporter

__all__ = ["BuildReporter", "render_bundle", "serialize_bundle", "write_bundle"]
