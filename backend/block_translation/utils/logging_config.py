"""
構造化ログ設定

アプリケーション起動時に一度だけ呼び出す
"""
import copy
import logging
import sys
from typing import Optional


LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)

# 翻訳処理の詳細ログを抑制するサードパーティロガー
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "anthropic",
    "google_genai",
    "uvicorn.access",
)


class ColoredFormatter(logging.Formatter):
    """色付きログフォーマッター（開発用）"""

    # ANSI カラーコード
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # ファイルハンドラーと共有するレコードは書き換えない
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        colored = copy.copy(record)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging(
    log_level: str = "INFO",
    enable_colors: bool = True,
    log_file: Optional[str] = None
):
    """
    ログ設定を初期化

    Args:
        log_level: ログレベル（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        enable_colors: 色付きログを有効にするか
        log_file: ログファイルパス（Noneまたは空文字の場合はファイル出力なし）
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(LOG_FORMAT) if enable_colors else logging.Formatter(LOG_FORMAT)
    )
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging initialized with level: {logging.getLevelName(level)}")
