"""WSGI entry point"""
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from navtree import create_app  # noqa: E402

app = create_app()

if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False))
