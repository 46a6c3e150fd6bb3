"""Rich progress display for a rewrite run."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.progress import TaskID as RichTaskID

from wikilinks.cli.common import format_count
from wikilinks.contracts.rewrite import DocumentRewrite, RewriteResult
from wikilinks.engine.progress import RewriteProgress


class RichRewriteProgress(RewriteProgress):
    """One bar over the Markdown files, with a running count of rewritten links.

    Changed and skipped files are printed above the bar as they happen::

        with RichRewriteProgress() as progress:
            result = await rewrite_directory(config, progress=progress)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn("[cyan]{task.fields[links]}[/] links"),
            console=self._console,
            transient=False,
        )
        self._task_id: RichTaskID | None = None
        self._links = 0

    def __enter__(self) -> RichRewriteProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    @property
    def links_rewritten(self) -> int:
        return self._links

    def files_found(self, total: int) -> None:
        self._task_id = self._progress.add_task("Rewriting", total=total, links=0)

    def file_done(self, relative_path: str, document: DocumentRewrite) -> None:
        count = len(document.rewritten_links)
        self._links += count
        if count:
            self._progress.console.print(f"  [green]~[/green] {relative_path} ({format_count(count, 'link')})")
        self._advance()

    def file_skipped(self, relative_path: str) -> None:
        self._progress.console.print(f"  [yellow]![/yellow] {relative_path} skipped")
        self._advance()

    def run_done(self, result: RewriteResult) -> None:
        if self._task_id is None:
            return
        verb = "would change" if result.dry_run else "changed"
        self._progress.update(
            self._task_id,
            description=f"{len(result.files_changed)} {verb}",
            completed=result.files_scanned,
            links=self._links,
        )

    def run_error(self, error: BaseException) -> None:
        if self._task_id is not None:
            self._progress.update(self._task_id, description="[red]✗[/red] Rewriting")

    def _advance(self) -> None:
        if self._task_id is not None:
            self._progress.update(self._task_id, advance=1, description="Rewriting", links=self._links)
