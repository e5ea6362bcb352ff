#!/usr/bin/env python
"""Утилита командной строки Django для проекта Galley."""

import os
import sys


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "galley.settings")
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Не удалось импортировать Django. Проверьте, что он установлен "
            "и виртуальное окружение активировано."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
