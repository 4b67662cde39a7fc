import os
from nanhai import create_app, db, socketio

app = create_app()

if __name__ == '__main__':
    with app.app_context():
        import nanhai.models  # noqa: F401
        db.create_all()
        app.extensions['nanhai'].ensure_document()
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, port=int(os.environ.get('PORT', '3000')), debug=True)
