"""
Dataset Loader

Reads each museum dataset into a Collection, keeping column names and
missing values exactly as they appear in the source file.
"""

from .collection_loader import CollectionLoader, load_collection

__all__ = ['CollectionLoader', 'load_collection']
