"""kmplibs — Kotlin Multiplatform library catalog aggregator."""

__version__ = "1.0.0"
