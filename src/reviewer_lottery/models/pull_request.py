"""
Pull Request Data Models

Pull Request 스냅샷 데이터 모델
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class PullRequest:
    """한 번의 실행 동안 변하지 않는 Pull Request 스냅샷"""
    number: int
    title: str
    url: str
    head_ref: str
    author: Optional[str] = None
    draft: bool = False

    def __post_init__(self):
        """데이터 검증"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")

    @property
    def is_ready_to_review(self) -> bool:
        """드래프트가 아닌 PR만 리뷰 대상"""
        return not self.draft

    @classmethod
    def from_api(cls, data: Dict) -> "PullRequest":
        """GitHub API 응답으로부터 생성"""
        user = data.get('user') or {}
        return cls(
            number=int(data['number']),
            title=data.get('title', ''),
            url=data.get('html_url') or data.get('url', ''),
            head_ref=(data.get('head') or {}).get('ref', ''),
            author=user.get('login'),
            draft=bool(data.get('draft', False)),
        )
