import os

from config import config
from ekheti import create_app

# Load configuration based on environment variable or default to development
config_name = os.environ.get('FLASK_ENV', 'development')
app = create_app(config[config_name])

if __name__ == '__main__':
    app.run(debug=True)
