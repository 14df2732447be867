import logging
from typing import Union

# HyCom 客户端通用 logger 实例
logger = logging.getLogger("hycom")

# 避免重复添加 handler（只初始化一次）
if not logger.handlers:
    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 控制台输出
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


def set_log_level(level: Union[str, int]) -> bool:
    """
    设置 hycom logger 的级别，支持 "DEBUG" 这样的名称或 logging 常量。

    Returns:
        bool: 级别无法识别时返回 False，logger 保持原级别
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            return False
        level = resolved
    elif not isinstance(level, int):
        return False
    logger.setLevel(level)
    return True
