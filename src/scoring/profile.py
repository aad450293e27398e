"""Profile and job pool loading utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from src.scoring.models import CandidateProfile, Job
from src.utils.logging import get_logger

logger = get_logger("profile")


class ProfileService:
    """Service for loading candidate profiles and job pools from disk."""

    def load_profile(self, path: Path | str) -> CandidateProfile:
        """Load and validate a profile from YAML or JSON."""
        data = self._load_file(Path(path))
        if not isinstance(data, dict):
            raise ValueError(f"Profile must be a mapping/dict: {path}")
        return CandidateProfile.model_validate(data)

    def validate_profile(self, profile: CandidateProfile) -> list[str]:
        """Return warnings for incomplete profiles."""
        warnings: list[str] = []

        if not profile.skills:
            warnings.append("Skills list is empty")
        if not profile.location and not profile.preferences.remote_ok:
            warnings.append("Location is empty and remote work is not accepted")
        if profile.preferences.salary_range is None:
            warnings.append("No salary range given")

        return warnings

    def load_jobs(self, path: Path | str) -> list[Job]:
        """Load a job pool.

        Supported inputs:
        - A JSON/YAML list of job objects
        - A JSON/YAML mapping with a `jobs` list
        - A directory of `*.json` files, each one job or a pool (sorted by name)
        """
        job_path = Path(path)
        if job_path.is_dir():
            jobs: list[Job] = []
            for child in sorted(job_path.glob("*.json")):
                jobs.extend(self.load_jobs(child))
            return jobs

        data = self._load_file(job_path)
        if isinstance(data, dict) and isinstance(data.get("jobs"), list):
            items: list[Any] = data["jobs"]
        elif isinstance(data, dict):
            items = [data]
        elif isinstance(data, list):
            items = data
        else:
            raise ValueError(f"Invalid job pool payload: {job_path}")

        jobs = []
        for item in items:
            if not isinstance(item, dict):
                raise ValueError(f"Job entries must be mappings: {job_path}")
            jobs.append(Job.from_dict(item))

        logger.debug(f"Loaded {len(jobs)} job(s) from {job_path}")
        return jobs

    def _load_file(self, path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            return self._load_yaml(path)
        if suffix == ".json":
            return self._load_json(path)
        return self._load_unknown(path)

    def _load_yaml(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML file: {path}") from e
        return {} if data is None else data

    def _load_json(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON file: {path}") from e

    def _load_unknown(self, path: Path) -> Any:
        """Auto-detect and load a file when the extension is unknown."""
        raw = path.read_text(encoding="utf-8")
        raw_stripped = raw.lstrip()

        # Try JSON first if it looks like JSON, otherwise fall back to YAML.
        if raw_stripped.startswith("{") or raw_stripped.startswith("["):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                pass

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid file format: {path}") from e
        return {} if data is None else data
