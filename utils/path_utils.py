import os
from pathlib import Path


# 项目根目录（包含 api、quotes、utils 的目录）
BASE_DIR = Path(__file__).resolve().parents[1]

LOG_DIR = BASE_DIR / 'log'

# 配置目录环境变量（容器内挂载 ConfigMap）
ENV_CONFIG_DIR = 'QUOTE_API_CONFIG_DIR'


def resolve_config_dir() -> Path:
    """配置目录查找顺序：环境变量 > 当前工作目录下的 config > 源码目录下的 config"""
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir:
        return Path(env_dir)

    cwd_dir = Path.cwd() / 'config'
    if cwd_dir.is_dir():
        return cwd_dir

    return BASE_DIR / 'config'


if __name__ == "__main__":
    print("BASE_DIR:", BASE_DIR)
    print("CONFIG_DIR:", resolve_config_dir())
    print("LOG_DIR:", LOG_DIR)
