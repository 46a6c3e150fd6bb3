"""Observer interface for a directory rewrite.

The runner reports each file as it is processed, together with what was
rewritten in it, so a display can show files and links as they go by.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wikilinks.contracts.rewrite import DocumentRewrite, RewriteResult


class RewriteProgress(ABC):
    @abstractmethod
    def files_found(self, total: int) -> None:
        """The scan finished; *total* files will be processed."""
        ...  # pragma: no cover

    @abstractmethod
    def file_done(self, relative_path: str, document: DocumentRewrite) -> None:
        """*relative_path* was processed; *document* holds its rewritten links."""
        ...  # pragma: no cover

    @abstractmethod
    def file_skipped(self, relative_path: str) -> None:
        """*relative_path* could not be read or written and was left alone."""
        ...  # pragma: no cover

    @abstractmethod
    def run_done(self, result: RewriteResult) -> None: ...  # pragma: no cover

    @abstractmethod
    def run_error(self, error: BaseException) -> None: ...  # pragma: no cover


class NullRewriteProgress(RewriteProgress):
    def files_found(self, total: int) -> None:
        pass

    def file_done(self, relative_path: str, document: DocumentRewrite) -> None:
        pass

    def file_skipped(self, relative_path: str) -> None:
        pass

    def run_done(self, result: RewriteResult) -> None:
        pass

    def run_error(self, error: BaseException) -> None:
        pass
