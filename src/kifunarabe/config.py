"""Runtime configuration.

保存先やWebサーバの設定。既定値を環境変数で上書きできる。

  KIFUNARABE_STORAGE   保存ファイルのパス
  KIFUNARABE_AUTOSAVE  "0" / "false" で自動保存を無効化
  KIFUNARABE_HOST      Webサーバのホスト
  KIFUNARABE_PORT      Webサーバのポート
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_STORAGE_PATH = Path.home() / ".kifunarabe" / "game_state.json"


@dataclass(frozen=True)
class AppConfig:
    """Configuration for the CLI and the web server.

    Attributes:
        storage_path: 対局状態の保存先（JSON）
        autosave:     1手ごとに自動保存するか
        host:         Webサーバのホスト
        port:         Webサーバのポート
    """

    storage_path: Path = field(default=DEFAULT_STORAGE_PATH)
    autosave: bool = True
    host: str = "127.0.0.1"
    port: int = 8000


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build an AppConfig from defaults overridden by environment variables."""
    env = os.environ if environ is None else environ
    defaults = AppConfig()

    storage = env.get("KIFUNARABE_STORAGE")
    autosave = env.get("KIFUNARABE_AUTOSAVE")
    port = env.get("KIFUNARABE_PORT")

    return AppConfig(
        storage_path=Path(storage).expanduser() if storage else defaults.storage_path,
        autosave=(
            autosave.strip().lower() not in ("0", "false", "no", "off")
            if autosave is not None
            else defaults.autosave
        ),
        host=env.get("KIFUNARABE_HOST", defaults.host),
        port=int(port) if port else defaults.port,
    )
