import sys
from datetime import date
from pathlib import Path

import pytest

# 确保项目根目录在 sys.path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def temp_excel(tmp_path):
    """临时工作簿路径（首次读写时自动创建）"""
    return tmp_path / "test_data.xlsx"


@pytest.fixture
def as_of():
    return date(2025, 1, 1)
