from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

FileStatus = Literal["", "added", "deleted", "renamed", "modified"]
Complexity = Literal["simple", "moderate", "complex"]


class FileSummary(BaseModel):
    """Changes of a single file in a unified diff."""
    model_config = ConfigDict(frozen=True)

    path: str = ""
    status: FileStatus = ""
    additions: int = Field(0, ge=0)
    deletions: int = Field(0, ge=0)
    file_type: str = "unknown"
    is_test_file: bool = False
    is_config_file: bool = False
    key_changes: List[str] = Field(default_factory=list, max_length=5)

    @property
    def changed_lines(self) -> int:
        return self.additions + self.deletions


class DiffAnalysisResult(BaseModel):
    file_summaries: List[FileSummary] = []
    smart_diff: str = ""
    total_additions: int = 0
    total_deletions: int = 0
    modified_files: int = 0
    key_changes: List[str] = []
    import_changes: List[str] = []
    complexity: Complexity = "simple"
    is_large_change: bool = False


class CommitRecord(BaseModel):
    hash: str
    author: str
    subject: str
    body: str = ""
    timestamp: Optional[datetime] = None


class TrendAnalysis(BaseModel):
    last_30_days: int = 0
    last_7_days: int = 0
    most_active_day: str = ""
    average_per_day: float = 0.0


class CommitStats(BaseModel):
    total_commits: int = 0
    type_distribution: Dict[str, int] = {}
    scope_distribution: Dict[str, int] = {}
    author_distribution: Dict[str, int] = {}
    verb_distribution: Dict[str, int] = {}
    language_distribution: Dict[str, int] = {}
    hour_distribution: Dict[str, int] = {}
    weekday_distribution: Dict[str, int] = {}
    average_subject_length: int = 0
    longest_subject: str = ""
    shortest_subject: str = ""
    with_scope: int = 0
    with_body: int = 0
    with_ticket: int = 0
    recent_trends: Optional[TrendAnalysis] = None


class CommitPattern(BaseModel):
    type: str
    scope: str = ""
    frequency: int = 0


class AnalysisReport(BaseModel):
    diff: Optional[DiffAnalysisResult] = None
    history: Optional[CommitStats] = None
    patterns: List[CommitPattern] = []
    branch: Optional[str] = None
    ticket: Optional[str] = None
    recent_subjects: List[str] = []
