from pathlib import Path


# 获取项目根目录
BASE_DIR = Path(__file__).resolve().parents[1]

# 常用子目录路径
CONFIG_DIR = BASE_DIR / 'config'
LOG_DIR = BASE_DIR / 'log'
RESOURCES_DIR = BASE_DIR / 'resources'


# 日志文件路径
LOG_FILE = LOG_DIR / 'sys.log'


def resolve_project_path(path: str) -> Path:
    """相对路径按项目根目录解析，绝对路径原样返回"""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return BASE_DIR / candidate


if __name__ == "__main__":
    print("BASE_DIR:", BASE_DIR)
    print("CONFIG_DIR:", CONFIG_DIR)
    print("RESOURCES_DIR:", RESOURCES_DIR)
