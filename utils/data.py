"""
Data Management Module - Content store queries
Filtering, ordering and pagination of portfolio projects and blog posts,
plus serializers that turn documents into template-ready dictionaries.
"""

import json
import math
import os
from flask import current_app
from sqlalchemy import String, cast, func, or_
from extensions import db
from models import (
    PortfolioProject, Technology, Post, project_technologies, PROJECT_CATEGORIES
)


# ========== PAGINATION ========== #

def paginate(page, per_page, total):
    """
    Resolve a requested page number against a total item count

    Args:
        page: Raw page value from the query string (anything int() accepts)
        per_page (int): Items per page
        total (int): Total matching items

    Returns:
        dict: page, per_page, offset, limit, total, total_pages, has_next,
              has_prev, first_item and last_item (1-based, 0 when empty)
    """
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    if page < 1:
        page = 1

    total = total or 0
    total_pages = math.ceil(total / per_page) if total else 0
    offset = (page - 1) * per_page

    return {
        'page': page,
        'per_page': per_page,
        'offset': offset,
        'limit': per_page,
        'total': total,
        'total_pages': total_pages,
        'has_next': page < total_pages,
        'has_prev': page > 1,
        'first_item': offset + 1 if total and offset < total else 0,
        'last_item': min(page * per_page, total),
    }


# ========== PORTFOLIO PROJECTS ========== #

def _like_pattern(term):
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


def _project_filters(category=None, featured=None, technologies=None, search=None):
    filters = []
    if category:
        filters.append(PortfolioProject.category == category)
    if featured is not None:
        filters.append(PortfolioProject.featured.is_(bool(featured)))
    if technologies:
        filters.append(PortfolioProject.technologies.any(Technology.name.in_(list(technologies))))
    if search and search.strip():
        pattern = _like_pattern(search.strip())
        filters.append(or_(
            PortfolioProject.title.ilike(pattern, escape='\\'),
            PortfolioProject.short_description.ilike(pattern, escape='\\'),
            cast(PortfolioProject.tags, String).ilike(pattern, escape='\\'),
        ))
    return filters


def _newest_completed_first():
    # Undated projects sort after dated ones on every backend
    return (
        PortfolioProject.completion_date.is_(None),
        PortfolioProject.completion_date.desc(),
    )


def get_portfolio_projects(category=None, featured=None, technologies=None, search=None,
                           offset=0, limit=12):
    """
    List portfolio projects matching every given filter

    Ordered featured first, then by completion date and creation date, newest first.
    """
    query = PortfolioProject.query.filter(*_project_filters(category, featured, technologies, search))
    query = query.order_by(
        PortfolioProject.featured.desc(),
        *_newest_completed_first(),
        PortfolioProject.created_at.desc(),
    )
    return [project_to_dict(p) for p in query.offset(offset).limit(limit).all()]


def count_portfolio_projects(category=None, featured=None, technologies=None, search=None):
    """Total number of projects matching the same filters as get_portfolio_projects"""
    return PortfolioProject.query.filter(
        *_project_filters(category, featured, technologies, search)).count()


def get_category_counts():
    """Project count per category, with every known category present, plus total"""
    rows = db.session.query(PortfolioProject.category, func.count(PortfolioProject.id)) \
        .group_by(PortfolioProject.category).all()
    counts = {category: 0 for category in PROJECT_CATEGORIES}
    for category, count in rows:
        counts[category] = count
    counts['total'] = sum(count for _, count in rows)
    return counts


def get_technologies():
    """All technologies by name, each with the number of projects referencing it"""
    rows = db.session.query(Technology, func.count(project_technologies.c.project_id)) \
        .outerjoin(project_technologies, project_technologies.c.technology_id == Technology.id) \
        .group_by(Technology.id) \
        .order_by(Technology.name.asc()) \
        .all()
    return [dict(technology_to_dict(tech), project_count=count) for tech, count in rows]


def get_featured_projects(limit=6):
    query = PortfolioProject.query.filter(PortfolioProject.featured.is_(True)) \
        .order_by(*_newest_completed_first(), PortfolioProject.created_at.desc())
    return [project_to_dict(p) for p in query.limit(limit).all()]


def get_project_by_slug(slug):
    """Single project with full details and up to three featured projects of the same category"""
    project = PortfolioProject.query.filter_by(slug=slug).first()
    if not project:
        return None

    related = PortfolioProject.query.filter(
        PortfolioProject.category == project.category,
        PortfolioProject.id != project.id,
        PortfolioProject.featured.is_(True),
    ).order_by(*_newest_completed_first()).limit(3).all()

    data = project_to_dict(project, detailed=True)
    data['related_projects'] = [
        {
            'id': p.id,
            'title': p.title,
            'slug': p.slug,
            'hero_image': (p.hero_media or {}).get('image'),
            'short_description': p.short_description or '',
            'category': p.category,
        }
        for p in related
    ]
    return data


# ========== POSTS ========== #

def _published_posts():
    return Post.query.filter(
        Post.status == 'published',
        Post.slug.isnot(None),
        Post.slug != '',
    )


def _newest_posts_first(query):
    return query.order_by(func.coalesce(Post.date, Post.updated_at).desc(), Post.updated_at.desc())


def get_paginated_posts(offset=0, limit=6):
    query = _newest_posts_first(_published_posts())
    return [post_to_dict(p) for p in query.offset(offset).limit(limit).all()]


def count_posts():
    return _published_posts().count()


def get_post_by_slug(slug):
    post = Post.query.filter_by(slug=slug).first()
    if not post:
        return None
    return post_to_dict(post, detailed=True)


def get_more_posts(skip_id=None, limit=2):
    """Latest posts other than skip_id, for 'more posts' sections"""
    query = _published_posts()
    if skip_id:
        query = query.filter(Post.id != skip_id)
    return [post_to_dict(p) for p in _newest_posts_first(query).limit(limit).all()]


# ========== SERIALIZERS ========== #

def _iso(value):
    return value.isoformat() if value else None


def technology_to_dict(technology):
    return {
        'id': technology.id,
        'name': technology.name,
        'slug': technology.slug,
        'category': technology.category or 'other',
        'color': technology.color or '',
        'icon': technology.icon or '',
    }


def project_to_dict(project, detailed=False):
    """Convert project model to dictionary"""
    hero_media = project.hero_media or {}
    result = {
        'id': project.id,
        'title': project.title,
        'slug': project.slug,
        'category': project.category,
        'short_description': project.short_description or '',
        'hero_image': hero_media.get('image'),
        'hero_video': hero_media.get('video'),
        'hero_gallery': hero_media.get('gallery') or [],
        'media_type': hero_media.get('type', 'image'),
        'featured': bool(project.featured),
        'tags': project.tags or [],
        'completion_date': _iso(project.completion_date),
        'client': project.client or '',
        'status': project.status or 'completed',
        'technical_details': project.technical_details or {},
        'technologies': [
            {'name': t.name, 'color': t.color or '', 'icon': t.icon or ''}
            for t in sorted(project.technologies, key=lambda t: t.name)
        ],
        'created_at': _iso(project.created_at),
        'updated_at': _iso(project.updated_at),
    }
    if detailed:
        result['description'] = project.description or []
        result['hero_media'] = hero_media
        result['gallery'] = project.gallery or []
    return result


def post_to_dict(post, detailed=False):
    """Convert post model to dictionary"""
    author = None
    if post.author:
        author = {
            'first_name': post.author.first_name,
            'last_name': post.author.last_name or '',
            'picture': post.author.picture or '',
        }
    result = {
        'id': post.id,
        'status': post.status or 'published',
        'title': post.title or 'Untitled',
        'slug': post.slug,
        'excerpt': post.excerpt or '',
        'cover_image': post.cover_image or '',
        'date': _iso(post.date or post.updated_at),
        'author': author,
    }
    if detailed:
        result['content'] = post.content or []
    return result


# ========== RESUME ========== #

def load_resume():
    """Load the resume document from the content directory, or None when unavailable"""
    path = os.path.join(current_app.config['CONTENT_DIR'], 'resume.json')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        current_app.logger.error(f"Error loading resume from {path}: {str(e)}")
        return None


__all__ = [
    'paginate',
    'get_portfolio_projects',
    'count_portfolio_projects',
    'get_category_counts',
    'get_technologies',
    'get_featured_projects',
    'get_project_by_slug',
    'get_paginated_posts',
    'count_posts',
    'get_post_by_slug',
    'get_more_posts',
    'technology_to_dict',
    'project_to_dict',
    'post_to_dict',
    'load_resume'
]
