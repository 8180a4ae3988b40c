"""
Todo API package.

Task lists and tasks exposed over FastAPI. The domain entities live in
``todo_api.domain``, the use cases in ``todo_api.services``, and the app
instance in ``todo_api.main``.
"""
