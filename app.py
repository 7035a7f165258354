# Heroku entry point - delegates to network_config/server.py
import os

from network_config.server import create_app

app = create_app()

if __name__ == '__main__':
    # Heroku sets PORT environment variable
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV') == 'development'

    app.run(host='0.0.0.0', port=port, debug=debug)
