"""Repository base class used by all concrete repositories."""
import json
import logging
import os
import tempfile
import threading
from typing import Any, Dict

from ..errors import StoreLoadError


class BaseRepository:
    """Provides JSON-backed persistence for a single data document.

    Sub-classes call :meth:`_load` to read the document from disk once at
    startup and :meth:`_save` to persist it back after a mutation.  All
    repositories keep the in-memory copy in ``self.data``; callers mutate that
    copy while holding :attr:`lock` and then call :meth:`save`.

    Unlike a cache file, the document is required: a missing or corrupt file
    raises :class:`~quiz.errors.StoreLoadError` instead of falling back to an
    empty default.  The write uses a write-then-rename strategy so the file is
    never left in a partially-written state.
    """

    def __init__(self, file_path: str) -> None:
        self._path = file_path
        self._log = logging.getLogger(f'quizgame.repository.{type(self).__name__}')
        self.lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    def _load(self) -> Dict[str, Any]:
        """Load the JSON object stored at *self._path*.

        Raises:
            StoreLoadError: If the file is missing, unreadable, not valid
                JSON, or its top level is not a JSON object.
        """
        try:
            with open(self._path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StoreLoadError(self._path, f'invalid JSON ({exc})') from exc
        except OSError as exc:
            raise StoreLoadError(self._path, exc.strerror or str(exc)) from exc

        if not isinstance(data, dict):
            raise StoreLoadError(self._path, 'top-level value must be a JSON object')
        self._log.info("Loaded %s (%d keys)", self._path, len(data))
        return data

    def _save(self, data: Any) -> None:
        """Atomically write *data* as pretty-printed JSON to *self._path*."""
        dir_name = os.path.dirname(os.path.abspath(self._path))
        fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        self._log.debug("Saved %s", self._path)
