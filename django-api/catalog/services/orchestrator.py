"""Upload orchestration for a pack submission.

Phases run strictly in order: cover, sample audio, stems. Inside a phase all
uploads are issued concurrently and joined before the next phase starts.
Results are remapped to descriptor order before being returned.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from common.errors import UploadError
from catalog.domain.submissions import AssetFile, SampleDraft
from catalog.services.uploader import COVERS, SAMPLES, STEMS, AssetUploader

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def total_steps(has_cover: bool, sample_count: int, has_stems: bool) -> int:
    """1[cover] + one per sample + 1[stems phase] + 1[final write]."""
    return int(has_cover) + sample_count + int(has_stems) + 1


class ProgressTracker:
    """Counts completed units and reports a rounded, non-decreasing percentage."""

    def __init__(self, total: int, callback: ProgressCallback | None = None) -> None:
        if total <= 0:
            raise ValueError("total must be positive")
        self._total = total
        self._done = 0
        self._callback = callback

    @property
    def total(self) -> int:
        return self._total

    @property
    def done(self) -> int:
        return self._done

    @property
    def percent(self) -> int:
        return round(self._done / self._total * 100)

    def advance(self) -> int:
        self._done = min(self._done + 1, self._total)
        percent = self.percent
        if self._callback is not None:
            self._callback(percent)
        return percent


@dataclass(frozen=True)
class UploadedAssets:
    """URLs produced by one orchestrator run, in descriptor order."""

    cover_url: str | None
    sample_urls: tuple[str, ...]
    stem_urls: tuple[tuple[str, ...], ...]

    def all_urls(self) -> tuple[str, ...]:
        urls = [self.cover_url] if self.cover_url else []
        urls.extend(self.sample_urls)
        for group in self.stem_urls:
            urls.extend(group)
        return tuple(urls)


def _first_failure(results: Sequence[object]) -> BaseException | None:
    for result in results:
        if isinstance(result, BaseException):
            return result
    return None


class UploadOrchestrator:
    """Sequences cover, sample and stem uploads for one submission."""

    def __init__(self, uploader: AssetUploader) -> None:
        self._uploader = uploader

    @staticmethod
    def plan(cover: AssetFile | None, samples: Sequence[SampleDraft]) -> int:
        """Total progress steps for a submission, including the final write."""
        has_stems = any(s.uploads_stems for s in samples)
        return total_steps(cover is not None, len(samples), has_stems)

    async def _tracked(self, asset: AssetFile, destination: str, tracker: ProgressTracker | None) -> str:
        url = await self._uploader.upload(asset, destination)
        if tracker is not None:
            tracker.advance()
        return url

    async def run(
        self,
        cover: AssetFile | None,
        samples: Sequence[SampleDraft],
        tracker: ProgressTracker,
    ) -> UploadedAssets:
        """Upload every asset of a submission.

        The tracker advances once for the cover, once per finished sample and
        once when the whole stems phase has finished. The final-write step is
        left to the caller.

        Raises:
            UploadError: The first failure in descriptor order. Assets already
                uploaded in this run are listed in `orphaned_urls`.
        """
        uploaded: list[str] = []

        cover_url = None
        if cover is not None:
            cover_url = await self._tracked(cover, COVERS, tracker)
            uploaded.append(cover_url)

        results = await asyncio.gather(
            *(self._tracked(s.audio, SAMPLES, tracker) for s in samples),
            return_exceptions=True,
        )
        uploaded.extend(r for r in results if isinstance(r, str))
        self._raise_first(results, uploaded)
        sample_urls = tuple(results)

        groups = [s.stem_files if s.uploads_stems else () for s in samples]
        flat = [(index, stem) for index, group in enumerate(groups) for stem in group]
        stem_urls: list[list[str]] = [[] for _ in samples]
        if flat:
            stem_results = await asyncio.gather(
                *(self._uploader.upload(stem, STEMS) for _, stem in flat),
                return_exceptions=True,
            )
            uploaded.extend(r for r in stem_results if isinstance(r, str))
            self._raise_first(stem_results, uploaded)
            for (index, _), url in zip(flat, stem_results):
                stem_urls[index].append(url)
            tracker.advance()

        return UploadedAssets(
            cover_url=cover_url,
            sample_urls=sample_urls,
            stem_urls=tuple(tuple(group) for group in stem_urls),
        )

    def _raise_first(self, results: Sequence[object], uploaded: list[str]) -> None:
        failure = _first_failure(results)
        if failure is None:
            return
        if not isinstance(failure, UploadError):
            raise failure
        if uploaded:
            # No cleanup policy exists for these yet.
            logger.warning("Upload run aborted; %d asset(s) left orphaned: %s", len(uploaded), uploaded)
        raise UploadError(failure.message, orphaned_urls=tuple(uploaded)) from failure
