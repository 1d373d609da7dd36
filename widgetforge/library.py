"""
Project library - the user's saved widget projects.

ProjectLibrary keeps the projects in list order (newest insert first) and
optionally mirrors every change to a ProjectStore:

    <directory>/
        index.json        {"projectIds": [...], "lastModified": "..."}
        <project id>.json one document per project, written with the codec

Single user, single writer. Hosts that serve the library from several threads
hold ProjectLibrary.lock around each read-modify-write sequence; the
library's own mutations take it too.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import Field

from .config import settings
from .errors import UnknownIdError, WidgetForgeError
from .formats import dumps_project, loads_project
from .layers import BibleWidgetType, WidgetModel, WidgetProject, new_id, utc_now

logger = logging.getLogger(__name__)


class ProjectIndex(WidgetModel):
    project_ids: list[str] = Field(default_factory=list, alias='projectIds')
    last_modified: datetime = Field(default_factory=utc_now, alias='lastModified')


class ProjectStore:
    """
    One JSON file per project plus an index of ids in library order.

    Example:
        store = ProjectStore(settings.LIBRARY_DIR)
        library = ProjectLibrary(store)
    """

    INDEX_NAME = 'index.json'

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    @property
    def index_path(self) -> Path:
        return self.directory / self.INDEX_NAME

    def project_path(self, project_id: str) -> Path:
        return self.directory / f'{project_id}.json'

    def _ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def save_project(self, project: WidgetProject) -> Path:
        """Write one project document."""
        self._ensure_directory()
        path = self.project_path(project.id)
        path.write_text(dumps_project(project), encoding='utf-8')
        return path

    def delete_project(self, project_id: str) -> bool:
        """Remove a project document, returns False if there was none."""
        path = self.project_path(project_id)
        if not path.exists():
            return False
        path.unlink()
        return True

    def save_index(self, project_ids: list[str]) -> None:
        self._ensure_directory()
        index = ProjectIndex(project_ids=project_ids)
        self.index_path.write_text(index.model_dump_json(by_alias=True), encoding='utf-8')

    def load_index(self) -> ProjectIndex:
        """
        Read the index; a missing index is an empty library.

        An unreadable index is rebuilt from the project documents in the
        directory, newest file first.
        """
        if not self.index_path.exists():
            return ProjectIndex()
        try:
            return ProjectIndex.model_validate_json(self.index_path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Rebuilding unreadable index {self.index_path}: {e}")
            return ProjectIndex(project_ids=self._scan_project_ids())

    def _scan_project_ids(self) -> list[str]:
        paths = [path for path in self.directory.glob('*.json') if path.name != self.INDEX_NAME]
        paths.sort(key=lambda path: path.stat().st_mtime, reverse=True)
        return [path.stem for path in paths]

    def load_project(self, project_id: str) -> WidgetProject:
        """
        Read one project document.

        Raises:
            FileNotFoundError: If the document does not exist
            DecodeError: If the document root is malformed
            ValidationError: If the document has duplicate layer ids
        """
        result = loads_project(self.project_path(project_id).read_text(encoding='utf-8'))
        for issue in result.issues:
            logger.warning(f"Project {project_id}: {issue}")
        return result.project

    def load_all(self) -> list[WidgetProject]:
        """
        Load every project listed in the index, in index order.

        Missing or unreadable documents are skipped with a warning.
        """
        projects = []
        for project_id in self.load_index().project_ids:
            try:
                projects.append(self.load_project(project_id))
            except (OSError, UnicodeDecodeError, WidgetForgeError) as e:
                logger.warning(f"Skipping project {project_id}: {e}")
        return projects


class ProjectLibrary:
    """
    The user's projects, most recently inserted first.

    The library owns the project instances it holds. Callers edit a project
    obtained from project() and call save_project() to record the change.
    """

    def __init__(self, store: Optional[ProjectStore] = None, recent_limit: Optional[int] = None):
        self.store = store
        self.recent_limit = recent_limit if recent_limit is not None else settings.RECENT_PROJECTS_LIMIT
        self._projects: list[WidgetProject] = []
        self.lock = threading.RLock()
        if store is not None:
            self._projects = sorted(store.load_all(), key=lambda p: p.modified_at, reverse=True)
            logger.debug(f"Loaded {len(self._projects)} projects from {store.directory}")

    @property
    def projects(self) -> list[WidgetProject]:
        return list(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self):
        return iter(list(self._projects))

    def _index_of(self, project_id: str) -> Optional[int]:
        for i, project in enumerate(self._projects):
            if project.id == project_id:
                return i
        return None

    def _require(self, project_id: str) -> WidgetProject:
        index = self._index_of(project_id)
        if index is None:
            raise UnknownIdError('project', project_id)
        return self._projects[index]

    def _persist(self, project: Optional[WidgetProject] = None) -> None:
        if self.store is None:
            return
        if project is not None:
            self.store.save_project(project)
        self.store.save_index([p.id for p in self._projects])

    # --- Queries ---

    def project(self, project_id: str) -> WidgetProject:
        """
        Get a project by ID.

        Raises:
            UnknownIdError: If no project has this id
        """
        return self._require(project_id)

    def get(self, project_id: str) -> Optional[WidgetProject]:
        index = self._index_of(project_id)
        return None if index is None else self._projects[index]

    def projects_for(self, widget_type: BibleWidgetType) -> list[WidgetProject]:
        widget_type = BibleWidgetType(widget_type)
        return [p for p in self._projects if p.widget_type is widget_type]

    def recent_projects(self, limit: Optional[int] = None) -> list[WidgetProject]:
        """Most recently modified projects first."""
        limit = self.recent_limit if limit is None else limit
        return sorted(self._projects, key=lambda p: p.modified_at, reverse=True)[:limit]

    def favorite_projects(self) -> list[WidgetProject]:
        return [p for p in self._projects if p.is_favorite]

    # --- Mutations ---

    def save_project(self, project: WidgetProject) -> WidgetProject:
        """
        Insert or replace a project and mark it modified.

        A new project goes to the front of the list; an existing one keeps
        its position.

        Returns:
            The stored project
        """
        with self.lock:
            project.touch()
            index = self._index_of(project.id)
            if index is None:
                self._projects.insert(0, project)
            else:
                self._projects[index] = project
            self._persist(project)
        logger.debug(f"Saved project {project.id} ({project.name!r})")
        return project

    def delete_project(self, project_id: str) -> None:
        """
        Raises:
            UnknownIdError: If no project has this id
        """
        with self.lock:
            project = self._require(project_id)
            self._projects.remove(project)
            if self.store is not None:
                self.store.delete_project(project_id)
            self._persist()
        logger.debug(f"Deleted project {project_id}")

    def toggle_favorite(self, project_id: str) -> bool:
        """
        Flip the favorite flag.

        Returns:
            The new flag value
        """
        with self.lock:
            project = self._require(project_id)
            project.is_favorite = not project.is_favorite
            self._persist(project)
            return project.is_favorite

    def rename_project(self, project_id: str, name: str) -> WidgetProject:
        with self.lock:
            project = self._require(project_id)
            project.name = name
            project.touch()
            self._persist(project)
            return project

    def duplicate_project(self, project_id: str) -> WidgetProject:
        """
        Copy a project under a new id, inserted at the front of the list.

        Every layer gets a fresh id; z-indices and content are kept. The copy
        is not a favorite and is named "<name> Copy".
        """
        with self.lock:
            source = self._require(project_id)
            copy = source.model_copy(deep=True)
            now = utc_now()
            copy.id = new_id()
            copy.name = f'{source.name} Copy'
            copy.is_favorite = False
            copy.created_at = now
            copy.modified_at = now
            for layer in copy.layers:
                layer.id = new_id()
            self._projects.insert(0, copy)
            self._persist(copy)
        logger.debug(f"Duplicated project {project_id} as {copy.id}")
        return copy
