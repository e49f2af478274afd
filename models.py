from extensions import db
from datetime import datetime
from sqlalchemy import JSON
import uuid

PROJECT_CATEGORIES = ('coding', 'photography', 'creative', 'data', 'animation', 'design')
PROJECT_STATUSES = ('completed', 'in-progress', 'on-hold', 'archived')


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


project_technologies = db.Table(
    'project_technologies',
    db.Column('project_id', db.String(36), db.ForeignKey('portfolio_projects.id'), primary_key=True),
    db.Column('technology_id', db.String(36), db.ForeignKey('technologies.id'), primary_key=True),
)


class Technology(db.Model):
    __tablename__ = 'technologies'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sanity_id = db.Column(db.String(255), unique=True)  # _id when imported from Sanity
    name = db.Column(db.String(255), unique=True, nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    category = db.Column(db.String(50), default='other')  # frontend, backend, database, devops, ...
    description = db.Column(db.Text)
    color = db.Column(db.String(20))  # hex color
    icon = db.Column(db.String(500))
    website = db.Column(db.String(500))
    featured = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class ProjectCategory(db.Model):
    __tablename__ = 'project_categories'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sanity_id = db.Column(db.String(255), unique=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.Text)
    color = db.Column(db.String(20))
    icon = db.Column(db.String(500))
    order = db.Column(db.Integer, default=0)
    featured = db.Column(db.Boolean, default=False)
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class Author(db.Model):
    __tablename__ = 'authors'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sanity_id = db.Column(db.String(255), unique=True)
    first_name = db.Column(db.String(255), nullable=False)
    last_name = db.Column(db.String(255))
    picture = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    posts = db.relationship('Post', backref='author', lazy=True)


class Post(db.Model):
    __tablename__ = 'posts'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sanity_id = db.Column(db.String(255), unique=True)
    author_id = db.Column(db.String(36), db.ForeignKey('authors.id'))
    title = db.Column(db.String(255))
    slug = db.Column(db.String(255), unique=True)
    excerpt = db.Column(db.Text)
    cover_image = db.Column(db.String(500))
    content = db.Column(SafeJSON, default=[])  # list of paragraphs / blocks
    date = db.Column(db.DateTime)
    status = db.Column(db.String(20), default='published')  # draft, published
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PortfolioProject(db.Model):
    __tablename__ = 'portfolio_projects'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sanity_id = db.Column(db.String(255), unique=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    category = db.Column(db.String(50), nullable=False)  # one of PROJECT_CATEGORIES
    short_description = db.Column(db.Text)
    description = db.Column(SafeJSON, default=[])
    hero_media = db.Column(SafeJSON, default={})  # {type, image, video, gallery}
    gallery = db.Column(SafeJSON, default=[])  # [{asset, caption, alt}]
    technical_details = db.Column(SafeJSON, default={})  # githubUrl, liveUrl, cameraInfo, ...
    featured = db.Column(db.Boolean, default=False)
    tags = db.Column(SafeJSON, default=[])
    completion_date = db.Column(db.Date)
    client = db.Column(db.String(255))
    status = db.Column(db.String(50), default='completed')  # one of PROJECT_STATUSES
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    technologies = db.relationship('Technology', secondary=project_technologies, lazy='selectin',
                                   backref=db.backref('projects', lazy=True))

    __table_args__ = (
        db.Index('idx_project_category_featured', 'category', 'featured'),
    )
