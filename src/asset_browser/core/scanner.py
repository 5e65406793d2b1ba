"""File system scanner for the Game Asset Browser."""

import os
import time
import logging
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from .classifier import EXTENSION_CATEGORIES, normalize_extension, split_extension
from .error_handler import ErrorHandler
from .models import Asset, Catalog, ScanOptions, ScanResult, SkippedEntry

# Everything the classifier knows plus scripts and generic documents, which
# are catalogued under Category.OTHER.
SUPPORTED_EXTENSIONS = frozenset(EXTENSION_CATEGORIES) | frozenset({
    # Scripts and shaders
    ".cs", ".lua", ".py", ".shader", ".hlsl", ".glsl",
    # Other common game files
    ".txt", ".md", ".pdf",
})


class AssetScanner:
    """Walks a directory tree and builds the asset catalog."""

    def __init__(self, config=None, progress_callback: Optional[Callable[[int, int], None]] = None):
        """
        Initialize the asset scanner.

        Args:
            config: Optional AppConfig supplying default scan options.
            progress_callback: Optional callback called with
                               (files_seen, assets_found) for every regular file.
        """
        self.config = config
        self.progress_callback = progress_callback
        self.error_handler = ErrorHandler()
        self.logger = logging.getLogger(__name__)

    def default_options(self) -> ScanOptions:
        if self.config is not None:
            return self.config.scan_options()
        return ScanOptions()

    @staticmethod
    def is_supported(path: Union[str, Path]) -> bool:
        """
        Check whether a file is on the scan allowlist.

        The extension is everything from the last dot of the file name, so a
        file named ".png" counts as a png while "png" has no extension.
        """
        _, extension = split_extension(Path(path).name)
        return normalize_extension(extension) in SUPPORTED_EXTENSIONS

    def scan_directory(self, root: Union[str, Path], options: Optional[ScanOptions] = None) -> ScanResult:
        """
        Scan a directory tree for supported assets.

        Never raises: a missing root gives an empty result, unreadable files
        are recorded in ``skipped``, and a failure while enumerating the tree
        returns whatever was collected with ``aborted`` set.

        Args:
            root: Directory to scan
            options: Scanning options, defaults from config when omitted

        Returns:
            ScanResult holding the catalog and skipped entries
        """
        options = options or self.default_options()
        start_time = time.time()
        root_path = Path(root).expanduser()
        result = ScanResult(root=str(root_path))

        if not root_path.is_dir():
            self.logger.warning(f"Scan root does not exist or is not a directory: {root_path}")
            return result

        root_path = root_path.absolute()
        result.root = str(root_path)
        self.logger.info(f"Scanning {root_path}")

        assets: List[Asset] = []
        try:
            for file_path in self._iter_files(root_path, options, result):
                result.total_files += 1

                if self.is_supported(file_path):
                    asset = self._build_asset(file_path, root_path, result.skipped, options)
                    if asset is not None:
                        assets.append(asset)

                self._report_progress(result.total_files, len(assets))

        except Exception as e:
            result.aborted = True
            self.logger.error(f"Error during directory scan of {root_path}: {e}")

        result.assets = tuple(assets)
        result.duration = time.time() - start_time

        if result.skipped:
            self.error_handler.log_error_summary(result.skipped, f"scan of {root_path}")

        self.logger.info(
            f"Scan of {root_path} finished: {len(assets)} assets from {result.total_files} files, "
            f"{result.skipped_count} skipped in {result.duration:.2f}s"
        )
        return result

    def _iter_files(self, root: Path, options: ScanOptions, result: ScanResult) -> Iterator[Path]:
        """Yield non-directory entries below root in a stable order."""

        def on_walk_error(error: OSError):
            failed = Path(error.filename) if error.filename else root
            if failed == root:
                # The root itself could not be listed.
                result.aborted = True
                self.logger.error(f"Cannot enumerate {root}: {error}")
            else:
                result.skipped.append(self.error_handler.record_skipped(error, failed))

        max_depth = options.max_depth
        if not options.recursive:
            max_depth = 0

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_walk_error,
                                                    followlinks=options.follow_symlinks):
            current = Path(dirpath)
            depth = len(current.relative_to(root).parts)

            if not options.include_hidden:
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
                filenames = [f for f in filenames if not f.startswith(".")]

            if max_depth is not None and depth >= max_depth:
                dirnames.clear()
            dirnames.sort()

            for filename in sorted(filenames):
                yield current / filename

    def _build_asset(self, file_path: Path, root: Path, skipped: List[SkippedEntry],
                     options: ScanOptions) -> Optional[Asset]:
        """Create the asset for one file, recording it as skipped if unreadable."""
        try:
            if not file_path.is_file():
                return None
            return Asset.create(file_path, root)
        except OSError as e:
            entry = self.error_handler.record_skipped(e, file_path)
        except Exception as e:
            self.logger.warning(f"Unexpected error processing {file_path}: {e}")
            entry = SkippedEntry(path=str(file_path), reason=str(e), error_type=type(e).__name__)

        skipped.append(entry)
        if options.verbose:
            self.logger.warning(f"Skipped {file_path}: {entry.reason}")
        else:
            self.logger.debug(f"Skipped {file_path}: {entry.reason}")
        return None

    def _report_progress(self, files_seen: int, assets_found: int):
        if not self.progress_callback:
            return
        try:
            self.progress_callback(files_seen, assets_found)
        except Exception as e:
            self.logger.warning(f"Progress callback error: {e}")


def scan(root: Union[str, Path], options: Optional[ScanOptions] = None) -> Catalog:
    """Scan root and return only the catalog."""
    return AssetScanner().scan_directory(root, options).assets
