import os

from library_catalog import create_app
from library_catalog.config import Config, DevelopmentConfig

# LIBRARY_ENV=development turns on debug mode and detailed error pages
app = create_app(DevelopmentConfig if os.environ.get('LIBRARY_ENV') == 'development' else Config)

if __name__ == '__main__':
    app.run(debug=True)
