#!/usr/bin/env python3
"""
Quiz Game - runtime helpers shared by the server and the tests.
Logging setup, settings loading from the environment, and console output.
"""

import logging
import os
from typing import Dict, Optional

from colorama import init, Fore, Style
from dotenv import find_dotenv, load_dotenv

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

DEFAULT_PORT = 3000
DEFAULT_HOST = '0.0.0.0'
DEFAULT_QUESTIONS_FILE = 'questions.json'
DEFAULT_LEADERBOARD_FILE = 'leaderboard.json'
DEFAULT_LOG_LEVEL = 'INFO'

LOG_FORMAT = '[%(levelname)s] %(name)s: %(message)s'
FILE_LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = DEFAULT_LOG_LEVEL,
                  log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root quizgame logger.

    Args:
        level:    Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                  Unknown names fall back to INFO.
        log_file: Optional path of a file that also receives the records.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.INFO)
    logger = logging.getLogger('quizgame')
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    log_path = os.path.abspath(log_file) if log_file else None
    if log_path and not any(isinstance(h, logging.FileHandler) and h.baseFilename == log_path
                            for h in logger.handlers):
        log_dir = os.path.dirname(log_path)
        try:
            os.makedirs(log_dir, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding='utf-8')
            fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
            logger.addHandler(fh)
        except OSError as exc:
            logger.warning('Could not create log file handler for %s: %s', log_file, exc)
    logger.setLevel(numeric)
    return logger


logger = logging.getLogger('quizgame')

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def parse_port(value: Optional[str], default: int = DEFAULT_PORT) -> int:
    """Return *value* as a port number, or *default* when unset or invalid."""
    if value is None or str(value).strip() == '':
        return default
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.warning('Invalid port %r, using %d', value, default)
        return default
    if not 0 < port < 65536:
        logger.warning('Port %d out of range, using %d', port, default)
        return default
    return port


def load_settings(env: Optional[Dict[str, str]] = None) -> Dict:
    """Build the server settings from environment variables.

    A ``.env`` file in the working directory is loaded first when *env* is
    not given; variables already set in the environment take precedence.

    Recognised variables:
    - PORT             listening port (default 3000)
    - HOST             bind address (default 0.0.0.0)
    - QUESTIONS_FILE   questions document (default questions.json)
    - LEADERBOARD_FILE leaderboard document (default leaderboard.json)
    - QUIZ_LOG_LEVEL   log level name (default INFO)
    - QUIZ_LOG_FILE    optional log file path
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = dict(os.environ)

    return {
        'port': parse_port(env.get('PORT')),
        'host': env.get('HOST') or DEFAULT_HOST,
        'questions_file': env.get('QUESTIONS_FILE') or DEFAULT_QUESTIONS_FILE,
        'leaderboard_file': env.get('LEADERBOARD_FILE') or DEFAULT_LEADERBOARD_FILE,
        'log_level': env.get('QUIZ_LOG_LEVEL') or DEFAULT_LOG_LEVEL,
        'log_file': env.get('QUIZ_LOG_FILE') or None,
    }

# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------

def print_banner(host: str, port: int) -> None:
    """Print the startup banner."""
    print("\n" + "=" * 60)
    print(f"{Fore.CYAN}{Style.BRIGHT}Quiz game server is starting...")
    print("=" * 60)
    print(f"\nListening on {Fore.GREEN}http://{host}:{port}")
    print("\nPress Ctrl+C to stop the server")
    print("=" * 60 + "\n")


def print_error(message: str) -> None:
    """Print a fatal error in red."""
    print(f"{Fore.RED}Error: {message}")
