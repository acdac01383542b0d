"""
Container format for documents with annotations.
"""
from .codec import ContainerCodec, ContainerMetadata, DecodedContainer
from .save_worker import SaveWorker

__all__ = ['ContainerCodec', 'ContainerMetadata', 'DecodedContainer', 'SaveWorker']
