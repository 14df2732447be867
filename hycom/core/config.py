import copy
import logging
import os
from typing import Dict, Any
from pathlib import Path

import yaml

from hycom.utils.logger_util import logger, set_log_level

# 配置文件路径，可通过 HYCOM_CONFIG 环境变量覆盖
CONFIG_DIR = Path(__file__).parent.parent / "config"
CONFIG_PATH = Path(os.environ.get("HYCOM_CONFIG", CONFIG_DIR / "config-dev.yaml"))

LAST_POSTS_STRATEGIES = ("endpoint", "explore")

# 默认配置（防止缺失项导致程序崩溃）
DEFAULT_CONFIG = {
    "hycom": {
        "base_url": "https://hycom.ir",
        "timeout": 30,
        "augment_site_info": False,
        "last_posts_strategy": "endpoint",
        "log_level": "INFO",
    }
}

# 全局配置缓存
CONFIG: Dict[str, Any] = {}
_config_file_mtime = CONFIG_PATH.stat().st_mtime if CONFIG_PATH.exists() else 0


def load_config(path: Path = None) -> Dict[str, Any]:
    """一次性加载总配置文件，缺失项使用默认值"""
    path = path or CONFIG_PATH
    merged = copy.deepcopy(DEFAULT_CONFIG)
    try:
        if not path.exists():
            logger.warning(f"配置文件不存在，使用默认配置: {path}")
            return merged

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            logger.error(f"配置文件顶层必须是映射，使用默认配置: {path}")
            return merged

        # 合并默认值（按节合并，节内未配置的键保留默认）
        for k, v in data.items():
            if isinstance(merged.get(k), dict):
                if v is None:
                    continue
                if not isinstance(v, dict):
                    logger.error(f"配置节 {k} 必须是映射，忽略该节: {v!r}")
                    continue
                merged[k].update(v)
            else:
                merged[k] = v
        return merged
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"加载配置文件失败: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)


# 初始化加载
CONFIG = load_config()


def get_client_config() -> Dict[str, Any]:
    section = CONFIG.get("hycom")
    return section if isinstance(section, dict) else {}

def get_base_url() -> str:
    return (get_client_config().get("base_url") or "https://hycom.ir").rstrip("/")

def get_timeout() -> float:
    return get_client_config().get("timeout", 30)

def get_augment_site_info() -> bool:
    return bool(get_client_config().get("augment_site_info", False))

def get_last_posts_strategy() -> str:
    """获取最新文章的获取策略（endpoint 或 explore）"""
    strategy = get_client_config().get("last_posts_strategy", "endpoint")
    if strategy not in LAST_POSTS_STRATEGIES:
        logger.warning(f"未知的 last_posts_strategy: {strategy}，使用 endpoint")
        return "endpoint"
    return strategy

def apply_log_level() -> None:
    """把配置中的 log_level 应用到 hycom logger"""
    level = get_client_config().get("log_level") or "INFO"
    if not set_log_level(level):
        logger.warning(f"未知的 log_level: {level}，保持 {logging.getLevelName(logger.level)}")


apply_log_level()

# ---------------- 文件变化检测 & 重载 ---------------- #

def has_config_changed() -> bool:
    """检查配置文件是否已更改"""
    global _config_file_mtime
    if not CONFIG_PATH.exists():
        return False
    current_mtime = CONFIG_PATH.stat().st_mtime
    if current_mtime > _config_file_mtime:
        _config_file_mtime = current_mtime
        return True
    return False

def reload_configs() -> None:
    """重新加载配置"""
    global CONFIG
    CONFIG = load_config()
    apply_log_level()
    logger.info(f"配置已重新加载: {CONFIG_PATH}")
