"""Настройки проекта Galley.

Этот модуль содержит все настройки Django проекта, включая:
- Базовые настройки Django
- Настройки безопасности
- Настройки базы данных
- Настройки статических файлов
- Настройки почты и писем по заказам
- Настройки планировщика статусов заказов
- Настройки JWT аутентификации
- Настройки логирования
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# -----------------------------------------------------------------------------
# Базовые настройки
# -----------------------------------------------------------------------------

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

TESTING = "pytest" in sys.argv[0] or "PYTEST_VERSION" in os.environ

# Загрузка переменных окружения
if not os.environ.get("SETTINGS_LOADED"):
    if os.getenv("DJANGO_ENV") == "ci" or TESTING:
        # В CI и тестах используем переменные окружения напрямую
        os.environ["SETTINGS_LOADED"] = "True"
    else:
        # Пробуем загрузить .env.dev, если не найден - используем .env.prod
        env_dev = BASE_DIR / ".env.dev"
        env_prod = BASE_DIR / ".env.prod"

        if env_dev.exists():
            env_file = env_dev
            print("Используются настройки разработки (.env.dev)")
        elif env_prod.exists():
            env_file = env_prod
            print("Используются производственные настройки (.env.prod)")
        else:
            raise FileNotFoundError(
                "Не найдены файлы настроек. Необходим .env.dev или .env.prod. "
                "Пожалуйста, создайте один из файлов на основе .env.example"
            )

        load_dotenv(env_file)
        os.environ["SETTINGS_LOADED"] = "True"

if TESTING:
    os.environ.setdefault("SECRET_KEY", "test-secret-key")
    os.environ.setdefault("DEBUG", "True")
    os.environ.setdefault("ALLOWED_HOSTS", "localhost,testserver")
    os.environ.setdefault("DB_ENGINE", "django.db.backends.sqlite3")
    os.environ.setdefault("DB_NAME", ":memory:")

# -----------------------------------------------------------------------------
# Проверка обязательных переменных
# -----------------------------------------------------------------------------

required_env_vars = [
    "SECRET_KEY",
    "DEBUG",
    "ALLOWED_HOSTS",
    "DB_ENGINE",
    "DB_NAME",
]

missing_env_vars = [var for var in required_env_vars if not os.getenv(var)]

if missing_env_vars:
    raise ValueError(
        f"Отсутствуют обязательные переменные окружения: {', '.join(missing_env_vars)}"
    )

# -----------------------------------------------------------------------------
# Основные настройки Django
# -----------------------------------------------------------------------------

SECRET_KEY = os.getenv("SECRET_KEY")
DEBUG = os.getenv("DEBUG") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS").split(",")

# -----------------------------------------------------------------------------
# Приложения
# -----------------------------------------------------------------------------

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Приложения
    "user.apps.UserConfig",
    "status.apps.StatusConfig",
    "order.apps.OrderConfig",
    "document.apps.DocumentConfig",
]

# -----------------------------------------------------------------------------
# Middleware
# -----------------------------------------------------------------------------

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# -----------------------------------------------------------------------------
# Основные настройки URL и шаблонов
# -----------------------------------------------------------------------------

AUTH_USER_MODEL = "user.User"
ROOT_URLCONF = "galley.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [
            BASE_DIR / "templates",
        ],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "galley.wsgi.application"

# -----------------------------------------------------------------------------
# База данных
# -----------------------------------------------------------------------------

DATABASES = {
    "default": {
        "ENGINE": os.getenv("DB_ENGINE"),
        "NAME": os.getenv("DB_NAME"),
        "USER": os.getenv("DB_USER", ""),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", ""),
        "PORT": os.getenv("DB_PORT", ""),
    }
}

# -----------------------------------------------------------------------------
# Валидация паролей
# -----------------------------------------------------------------------------

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# -----------------------------------------------------------------------------
# Интернационализация
# -----------------------------------------------------------------------------

LANGUAGE_CODE = "ru"
# Часовой пояс по умолчанию для заказов без часового пояса кейтерера
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# -----------------------------------------------------------------------------
# Статические файлы
# -----------------------------------------------------------------------------

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# -----------------------------------------------------------------------------
# Прочие настройки Django
# -----------------------------------------------------------------------------

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
API_VERSION = os.getenv("API_VERSION", "v1")

# -----------------------------------------------------------------------------
# Настройки безопасности
# -----------------------------------------------------------------------------

if not DEBUG:
    # Настройки безопасности только для продакшена
    SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "True") == "True"
    SECURE_HSTS_SECONDS = int(os.getenv("SECURE_HSTS_SECONDS", "31536000"))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = (
        os.getenv("SECURE_HSTS_INCLUDE_SUBDOMAINS", "True") == "True"
    )
    SECURE_HSTS_PRELOAD = os.getenv("SECURE_HSTS_PRELOAD", "True") == "True"

    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "True") == "True"
    CSRF_COOKIE_SECURE = os.getenv("CSRF_COOKIE_SECURE", "True") == "True"
else:
    # Настройки для разработки и тестов
    SECURE_SSL_REDIRECT = False
    SESSION_COOKIE_SECURE = False
    CSRF_COOKIE_SECURE = False

CSRF_TRUSTED_ORIGINS = [
    origin for origin in os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if origin
]

# -----------------------------------------------------------------------------
# Настройки статических файлов
# -----------------------------------------------------------------------------

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# -----------------------------------------------------------------------------
# Почта
# -----------------------------------------------------------------------------

EMAIL_BACKEND = os.getenv(
    "EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend"
)
EMAIL_HOST = os.getenv("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "True") == "True"
EMAIL_TIMEOUT = int(os.getenv("EMAIL_TIMEOUT", "30"))
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "orders@galley.local")
EMAIL_REPLY_TO = os.getenv("EMAIL_REPLY_TO", "")
# Название в начале темы писем по заказам
EMAIL_SUBJECT_BRAND = os.getenv("EMAIL_SUBJECT_BRAND", "Galley")

# -----------------------------------------------------------------------------
# Планировщик статусов заказов
# -----------------------------------------------------------------------------

ORDER_SCHEDULER = {
    "INTERVAL_MINUTES": int(os.getenv("ORDER_SCHEDULER_INTERVAL_MINUTES", "15")),
    "IN_PREPARATION_HOURS": float(os.getenv("ORDER_SCHEDULER_IN_PREPARATION_HOURS", "4")),
    "READY_FOR_DELIVERY_HOURS": float(
        os.getenv("ORDER_SCHEDULER_READY_FOR_DELIVERY_HOURS", "1")
    ),
    "SCAN_LIMIT": int(os.getenv("ORDER_SCHEDULER_SCAN_LIMIT", "500")),
}

# -----------------------------------------------------------------------------
# JWT аутентификация
# -----------------------------------------------------------------------------

JWT_AUTH = {
    "SECRET_KEY": os.getenv("JWT_SECRET_KEY", SECRET_KEY),
    "ALGORITHM": os.getenv("JWT_ALGORITHM", "HS256"),
    "ACCESS_TOKEN_LIFETIME_MINUTES": int(
        os.getenv("JWT_ACCESS_TOKEN_LIFETIME_MINUTES", "30")
    ),
    "REFRESH_TOKEN_LIFETIME_DAYS": int(os.getenv("JWT_REFRESH_TOKEN_LIFETIME_DAYS", "7")),
}

# -----------------------------------------------------------------------------
# Настройки для тестов
# -----------------------------------------------------------------------------

if TESTING:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }
    EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    TIME_ZONE = "UTC"
    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    STORAGES["staticfiles"] = {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    }

# -----------------------------------------------------------------------------
# Настройки логирования
# -----------------------------------------------------------------------------

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "order": {
            "handlers": ["console"],
            "level": os.getenv("ORDER_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
        "status": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": True,
        },
        "document": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": True,
        },
    },
}
