"""
Quiz game application package.

Uses a layered architecture:

  quiz/repositories/  pure I/O: loading from and persisting to JSON files.
  quiz/services/      business logic: question picking, score rules.

``quizgame_server.initialize_store`` is the integration point: it creates the
repository and service instances once at startup and binds them to the
module-level services used by the Flask route handlers, keeping the HTTP
layer separate from the domain.
"""
