"""
Services module
Export all services
"""

from voxbridge.services.transcription import SimulatedTranscriptionProvider, TranscriptionProvider
from voxbridge.services.translation import TranslationEngine, build_translation_engine
from voxbridge.services.websocket import ConnectionManager, RealtimePipeline

__all__ = [
    "TranslationEngine",
    "build_translation_engine",
    "TranscriptionProvider",
    "SimulatedTranscriptionProvider",
    "ConnectionManager",
    "RealtimePipeline",
]
