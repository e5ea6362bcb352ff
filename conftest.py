"""
Глобальная конфигурация pytest для проекта.

Содержит:
- Настройку PYTHONPATH (каталог проекта Django galley/)
"""

import os
import sys

# Добавляем каталог проекта Django в PYTHONPATH
project_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "galley")
if project_dir not in sys.path:
    sys.path.insert(0, project_dir)
