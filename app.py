"""
Portfolio Site - Main Application Entry Point
Application Factory Pattern for a modular architecture

This module initializes the Flask application with its extensions,
configuration and hooks. All route handling is delegated to blueprints.
"""

import os
from datetime import datetime
from flask import Flask, render_template, request
from config import get_config
from extensions import db

# Import all blueprints
from blueprints.pages import pages_bp
from blueprints.portfolio import portfolio_bp
from blueprints.posts import posts_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)
    app.json.ensure_ascii = False

    # Initialize extensions with app
    initialize_extensions(app)

    # Register Jinja filters
    register_template_filters(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio site is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            import models  # noqa: F401  registers the content models
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_template_filters(app):
    """Register Jinja filters used by the templates"""
    from utils.helpers import format_date, truncate_text, category_label, render_rich_text
    app.jinja_env.filters['format_date'] = format_date
    app.jinja_env.filters['truncate_text'] = truncate_text
    app.jinja_env.filters['category_label'] = category_label
    app.jinja_env.filters['rich_text'] = render_rich_text
    app.logger.info('✓ Registered Jinja filters: format_date, truncate_text, category_label, rich_text')


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(pages_bp)
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(posts_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return render_template('500.html'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        """Site-wide template context"""
        from utils.ui_helpers import inject_blueprint_assets, get_page_specific_class

        blueprint_assets = inject_blueprint_assets()
        page_class = get_page_specific_class(
            blueprint_assets.get('current_blueprint'),
            request.endpoint.split('.')[-1] if request.endpoint else None
        )

        return {
            'current_year': datetime.now().year,
            'site_title': app.config['SITE_TITLE'],
            'site_description': app.config['SITE_DESCRIPTION'],
            'blueprint_styles': blueprint_assets.get('blueprint_styles', []),
            'current_blueprint': blueprint_assets.get('current_blueprint'),
            'page_class': page_class
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers and request the viewport width client hint"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Accept-CH'] = 'Sec-CH-Viewport-Width, Viewport-Width'
        response.headers['Vary'] = 'Sec-CH-Viewport-Width, Viewport-Width'
        return response


if __name__ == '__main__':
    env = os.environ.get('FLASK_ENV', 'development')
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
