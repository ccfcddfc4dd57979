"""Blob storage used as the object-store collaborator."""

from blobserve.store.blobs import Blob, BlobStore, git_blob_id

__all__ = ["Blob", "BlobStore", "git_blob_id"]
