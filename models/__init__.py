from .commit import CommitRecord

__all__ = ['CommitRecord']
