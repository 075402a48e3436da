"""
Reviewer Group Data Models

리뷰어 그룹 및 로터리 설정 데이터 모델들
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, validator


CONTACT_SEPARATOR = ":"


@dataclass(frozen=True)
class ReviewerEntry:
    """그룹에 속한 리뷰어 한 명"""
    username: str
    contact: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if not self.username or not self.username.strip():
            raise ValueError("Username cannot be empty")

    @classmethod
    def parse(cls, raw: str) -> "ReviewerEntry":
        """'username' 또는 'username:contact' 형식의 문자열 파싱"""
        parts = raw.strip().split(CONTACT_SEPARATOR)
        contact = parts[1].strip() if len(parts) > 1 else ""
        return cls(username=parts[0].strip(), contact=contact or None)


@dataclass(frozen=True)
class ReviewerGroup:
    """리뷰어 그룹"""
    entries: Tuple[ReviewerEntry, ...]
    reviewers: int = 0
    internal_reviewers: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if self.reviewers < 0:
            raise ValueError("reviewers must be non-negative")
        if self.internal_reviewers is not None and self.internal_reviewers < 0:
            raise ValueError("internal_reviewers must be non-negative")

        usernames = [entry.username for entry in self.entries]
        if len(usernames) != len(set(usernames)):
            raise ValueError(f"Duplicate usernames in group {self.label}")

    @property
    def usernames(self) -> List[str]:
        """연락처를 제외한 GitHub 사용자명 목록"""
        return [entry.username for entry in self.entries]

    @property
    def label(self) -> str:
        return self.name or "<unnamed>"


@dataclass(frozen=True)
class LotteryConfig:
    """선언 순서대로 정렬된 리뷰어 그룹 설정"""
    groups: Tuple[ReviewerGroup, ...]

    def contact_map(self) -> Dict[str, str]:
        """GitHub 사용자명 -> 채팅 연락처 매핑"""
        contacts = {}
        for group in self.groups:
            for entry in group.entries:
                if entry.contact:
                    contacts[entry.username] = entry.contact
        return contacts


# Pydantic models for YAML validation
class ReviewerGroupModel(BaseModel):
    """설정 파일 검증용 ReviewerGroup 모델"""
    name: Optional[str] = None
    usernames: List[str]
    reviewers: int = 0
    internal_reviewers: Optional[int] = None

    class Config:
        extra = "forbid"

    @validator('usernames')
    def validate_usernames(cls, v):
        names = [ReviewerEntry.parse(raw).username for raw in v]
        if len(names) != len(set(names)):
            raise ValueError('Usernames must be unique within a group')
        return v

    @validator('reviewers', 'internal_reviewers')
    def validate_counts(cls, v):
        if v is not None and v < 0:
            raise ValueError('Reviewer counts must be non-negative')
        return v

    def to_group(self) -> ReviewerGroup:
        return ReviewerGroup(
            name=self.name,
            entries=tuple(ReviewerEntry.parse(raw) for raw in self.usernames),
            reviewers=self.reviewers,
            internal_reviewers=self.internal_reviewers,
        )


class LotteryConfigModel(BaseModel):
    """설정 파일 검증용 LotteryConfig 모델"""
    groups: List[ReviewerGroupModel]

    class Config:
        extra = "forbid"

    def to_config(self) -> LotteryConfig:
        return LotteryConfig(groups=tuple(group.to_group() for group in self.groups))
