"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple
from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler

from pydantic import ValidationError

from .models.group import LotteryConfig, LotteryConfigModel


DEFAULT_LOTTERY_CONFIG_PATH = ".github/reviewer-lottery.yml"


class ConfigurationError(ValueError):
    """잘못된 설정"""


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass
class SlackConfig:
    """Slack 웹훅 설정"""
    webhook_url: Optional[str] = None
    timeout_seconds: int = 10


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class ActionEnv:
    """실행 환경 (GitHub Actions) 정보"""
    repository: str = ""
    ref: str = ""

    def owner_and_repo(self) -> Tuple[str, str]:
        """'owner/repo' 문자열 분리"""
        owner, _, repo = self.repository.partition('/')
        return owner, repo


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig
    slack: SlackConfig
    logging: LoggingConfig
    env: ActionEnv
    lottery_config_path: str = DEFAULT_LOTTERY_CONFIG_PATH

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            github=GitHubConfig(
                token=os.getenv("INPUT_REPO-TOKEN") or os.getenv("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", "30")),
            ),
            slack=SlackConfig(
                webhook_url=os.getenv("INPUT_SLACK-WEBHOOK-URL") or os.getenv("SLACK_WEBHOOK_URL"),
                timeout_seconds=int(os.getenv("SLACK_TIMEOUT", "10")),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            env=ActionEnv(
                repository=os.getenv("GITHUB_REPOSITORY", ""),
                ref=os.getenv("GITHUB_HEAD_REF", ""),
            ),
            lottery_config_path=os.getenv("INPUT_CONFIG") or DEFAULT_LOTTERY_CONFIG_PATH,
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.env.ref:
            errors.append("missing GITHUB_HEAD_REF")

        owner, repo = self.env.owner_and_repo()
        if not self.env.repository:
            errors.append("missing GITHUB_REPOSITORY")
        elif not owner or not repo or '/' in repo:
            errors.append(f"Repository must be in format 'owner/repo': {self.env.repository}")

        if not self.github.token:
            errors.append("GitHub token is required")

        if not self.slack.webhook_url:
            errors.append("Slack webhook URL is required")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'slack': {
                'timeout_seconds': self.slack.timeout_seconds,
                # 웹훅 URL도 비밀값이므로 제외
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'env': {
                'repository': self.env.repository,
                'ref': self.env.ref,
            },
            'lottery_config_path': self.lottery_config_path,
        }


def load_lottery_config(config_path: str) -> LotteryConfig:
    """YAML 파일에서 리뷰어 그룹 설정 로드"""
    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")

    return parse_lottery_config(config_data or {})


def parse_lottery_config(config_data: Dict[str, Any]) -> LotteryConfig:
    """딕셔너리를 검증하여 LotteryConfig로 변환"""
    if not isinstance(config_data, dict):
        raise ConfigurationError("Lottery configuration must be a mapping with a 'groups' key")

    try:
        return LotteryConfigModel(**config_data).to_config()
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(f"Invalid lottery configuration: {e}")


def setup_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))

        # 루트 로거에 핸들러 추가
        logging.getLogger().addHandler(handler)
