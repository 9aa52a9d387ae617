#!/usr/bin/env python3
"""
Quiz Game Server - JSON HTTP API for the quiz game.
Serves random questions by category, updates yearly player scores, and
accepts new questions.
"""

import argparse
import logging
import sys
import threading
from typing import Dict, Optional, Tuple

from flask import Flask, jsonify, request

import quizgame
from quiz.errors import QuizError, StoreLoadError
from quiz.repositories import LeaderboardRepository, QuestionRepository
from quiz.services import QuestionService, ScoreService

server_logger = logging.getLogger('quizgame.server')

app = Flask(__name__)

# Services over the loaded documents; set by initialize_store()
question_service: Optional[QuestionService] = None
score_service: Optional[ScoreService] = None
store_lock = threading.Lock()

QUIZ_FIELDS = ('category', 'playerid', 'name')
SCORE_FIELDS = ('playerid', 'option')
ADDQ_FIELDS = ('category', 'question', 'options', 'answer')

QUIZ_MISSING = "Missing parameters. Ensure category, playerid, and name are provided."
SCORE_MISSING = "Missing parameters. Ensure playerid and option (correct or wrong) are provided."
ADDQ_MISSING = "Missing parameters. Ensure category, question, options, and answer are provided."


def initialize_store(questions_file: str = quizgame.DEFAULT_QUESTIONS_FILE,
                     leaderboard_file: str = quizgame.DEFAULT_LEADERBOARD_FILE) -> Flask:
    """Load both documents, bind the services, and return ``app``.

    Calling it again replaces the services with ones over the new files.

    Raises:
        StoreLoadError: If either document cannot be loaded.  The server
            must not start without its data files.
    """
    global question_service, score_service
    question_repo = QuestionRepository(questions_file)
    leaderboard_repo = LeaderboardRepository(leaderboard_file)
    with store_lock:
        question_service = QuestionService(question_repo)
        score_service = ScoreService(leaderboard_repo)
    return app


def _question_service() -> QuestionService:
    if question_service is None:
        raise QuizError('Quiz data is not loaded.')
    return question_service


def _score_service() -> ScoreService:
    if score_service is None:
        raise QuizError('Quiz data is not loaded.')
    return score_service


def _payload() -> Dict:
    """Return the request body as a dict (JSON first, then form fields)."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    data = request.form.to_dict()
    if 'options' in request.form:
        data['options'] = request.form.getlist('options')
    return data


def _is_missing(value) -> bool:
    """Absent, null, empty string, false and zero count as missing.

    Lists and objects are present even when empty.
    """
    if isinstance(value, (list, dict)):
        return False
    return not value


def _missing_fields(data: Dict, fields: Tuple[str, ...]) -> bool:
    return any(_is_missing(data.get(field)) for field in fields)


def _error(message: str, status: int):
    return jsonify({'error': message}), status

# ---------------------------------------------------------------------------
# Quiz API
# ---------------------------------------------------------------------------

@app.route('/quiz', methods=['POST'])
def api_quiz():
    """Return a random question from the requested category."""
    data = _payload()
    if _missing_fields(data, QUIZ_FIELDS):
        return _error(QUIZ_MISSING, 400)

    try:
        question = _question_service().get_question(str(data['category']).lower())
    except QuizError as e:
        server_logger.warning(f"Quiz request failed: {e}")
        return _error(str(e), 500)
    return jsonify({
        'question': question,
        'answer': question.get('answer'),
        'link': question.get('link'),
    })


@app.route('/scores', methods=['PUT'])
def api_update_score():
    """Add or remove one point for a player based on their answer."""
    data = _payload()
    if _missing_fields(data, SCORE_FIELDS):
        return _error(SCORE_MISSING, 400)

    try:
        player = _score_service().update_score(data['playerid'],
                                               str(data['option']).lower())
    except QuizError as e:
        server_logger.warning(f"Score update failed: {e}")
        return _error(str(e), 500)
    except OSError as e:
        server_logger.error(f"Could not save leaderboard: {e}")
        return _error(str(e), 500)
    return jsonify({'message': f"Score updated successfully for player {player.get('name')}."})


@app.route('/addq', methods=['POST'])
def api_add_question():
    """Append a new question to a category (created on first use)."""
    data = _payload()
    if _missing_fields(data, ADDQ_FIELDS):
        return _error(ADDQ_MISSING, 400)

    category = str(data['category']).lower()
    try:
        record = _question_service().add_question(
            category,
            data['question'],
            data['options'],
            str(data['answer']).upper(),
            link=data.get('link'),
        )
    except (QuizError, OSError) as e:
        server_logger.error(f"Could not add question to {category!r}: {e}")
        return _error(str(e), 500)
    return jsonify({
        'message': f'Question added successfully to category "{category}".',
        'question': record,
    })


@app.route('/categories', methods=['GET'])
def api_categories():
    """List category names."""
    try:
        categories = _question_service().list_categories()
    except QuizError as e:
        return _error(str(e), 500)
    return jsonify({'categories': categories})

# ---------------------------------------------------------------------------
# Leaderboard API
# ---------------------------------------------------------------------------

@app.route('/leaderboard/<year>', methods=['GET'])
def api_leaderboard(year):
    """Return the player records for *year* (empty for an unknown year)."""
    try:
        leaderboard = _score_service().get_leaderboard(year)
    except QuizError as e:
        server_logger.error(f"Leaderboard lookup failed: {e}")
        return _error(str(e), 500)
    return jsonify({'leaderboard': leaderboard})

# ---------------------------------------------------------------------------
# API Documentation
# ---------------------------------------------------------------------------

@app.route('/openapi.json', methods=['GET'])
def api_openapi_spec():
    """Serve the OpenAPI 3.0 specification as JSON."""
    try:
        from openapi_spec import build_spec
        server_url = request.url_root.rstrip('/')
        return jsonify(build_spec(server_url=server_url))
    except Exception as e:
        server_logger.error(f"Error building OpenAPI spec: {e}")
        return _error('Could not generate spec', 500)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the server"""
    settings = quizgame.load_settings()

    parser = argparse.ArgumentParser(description='Quiz game server')
    parser.add_argument('--host', default=settings['host'], help='Bind address')
    parser.add_argument('--port', type=int, default=settings['port'], help='Listening port')
    parser.add_argument('--questions', default=settings['questions_file'],
                        help='Path to the questions document')
    parser.add_argument('--leaderboard', default=settings['leaderboard_file'],
                        help='Path to the leaderboard document')
    parser.add_argument('--log-level', default=settings['log_level'],
                        help='Log level (DEBUG, INFO, WARNING, ERROR)')
    args = parser.parse_args(argv)

    quizgame.setup_logging(args.log_level, settings['log_file'])

    try:
        initialize_store(args.questions, args.leaderboard)
    except StoreLoadError as e:
        server_logger.critical(str(e))
        quizgame.print_error(str(e))
        return 1

    quizgame.print_banner(args.host, args.port)
    server_logger.info(f"Server is live on port {args.port}")
    try:
        app.run(host=args.host, port=args.port, debug=False)
    except KeyboardInterrupt:
        server_logger.info("Server stopped")
    return 0


if __name__ == '__main__':
    sys.exit(main())
