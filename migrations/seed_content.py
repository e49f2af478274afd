"""
Seed Script: JSON to content store
Loads technologies, categories, authors, projects and posts from content/seed.json.
Documents are matched by slug (authors by name), so running it twice is safe.

Usage:
    python migrations/seed_content.py [path/to/seed.json]
"""

import os
import sys
import json
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from extensions import db
from models import Technology, ProjectCategory, Author, Post, PortfolioProject, PROJECT_CATEGORIES


def parse_date(date_str):
    """Parse date string to datetime object"""
    if not date_str:
        return None
    formats = [
        '%Y-%m-%d %H:%M:%S',
        '%Y-%m-%d',
        '%Y-%m-%dT%H:%M:%S.%f',
        '%Y-%m-%dT%H:%M:%S'
    ]
    for fmt in formats:
        try:
            return datetime.strptime(date_str.rstrip('Z'), fmt)
        except ValueError:
            continue
    return None


def seed_technologies(technologies_data):
    """Create or update technologies; returns {name: Technology}"""
    print(f"Seeding {len(technologies_data)} technologies...")
    by_name = {}
    for tech_json in technologies_data:
        name = tech_json.get('name')
        if not name:
            continue
        slug = tech_json.get('slug') or name.lower().replace('.', '').replace(' ', '-')
        tech = Technology.query.filter_by(slug=slug).first()
        if not tech:
            tech = Technology(slug=slug, name=name)
            db.session.add(tech)
        tech.name = name
        tech.sanity_id = tech_json.get('sanity_id') or tech.sanity_id
        tech.category = tech_json.get('category', 'other')
        tech.description = tech_json.get('description', '')
        tech.color = tech_json.get('color', '')
        tech.icon = tech_json.get('icon', '')
        tech.website = tech_json.get('website', '')
        tech.featured = tech_json.get('featured', False)
        by_name[name] = tech
    return by_name


def seed_categories(categories_data):
    print(f"Seeding {len(categories_data)} project categories...")
    for category_json in categories_data:
        slug = category_json.get('slug')
        if not slug:
            continue
        category = ProjectCategory.query.filter_by(slug=slug).first()
        if not category:
            category = ProjectCategory(slug=slug, name=category_json.get('name', slug))
            db.session.add(category)
        category.name = category_json.get('name', slug)
        category.sanity_id = category_json.get('sanity_id') or category.sanity_id
        category.description = category_json.get('description', '')
        category.color = category_json.get('color', '')
        category.icon = category_json.get('icon', '')
        category.order = category_json.get('order', 0)
        category.featured = category_json.get('featured', False)
        category.active = category_json.get('active', True)


def seed_authors(authors_data):
    """Create authors; returns {key: Author} where key defaults to the full name"""
    print(f"Seeding {len(authors_data)} authors...")
    by_key = {}
    for author_json in authors_data:
        first_name = author_json.get('first_name')
        if not first_name:
            continue
        last_name = author_json.get('last_name', '')
        author = Author.query.filter_by(first_name=first_name, last_name=last_name).first()
        if not author:
            author = Author(first_name=first_name, last_name=last_name)
            db.session.add(author)
        author.picture = author_json.get('picture', '')
        author.sanity_id = author_json.get('sanity_id') or author.sanity_id
        by_key[author_json.get('key') or f"{first_name} {last_name}".strip()] = author
    return by_key


def seed_projects(projects_data, technologies):
    print(f"Seeding {len(projects_data)} portfolio projects...")
    for project_json in projects_data:
        slug = project_json.get('slug')
        category = project_json.get('category')
        if not slug or category not in PROJECT_CATEGORIES:
            print(f"  Skipping project without slug or with unknown category: {project_json.get('title')}")
            continue
        project = PortfolioProject.query.filter_by(slug=slug).first()
        if not project:
            project = PortfolioProject(slug=slug)
            db.session.add(project)
        project.sanity_id = project_json.get('sanity_id') or project.sanity_id
        project.title = project_json.get('title', slug)
        project.category = category
        project.short_description = project_json.get('short_description', '')
        project.description = project_json.get('description', [])
        project.hero_media = project_json.get('hero_media', {'type': 'image'})
        project.gallery = project_json.get('gallery', [])
        project.technical_details = project_json.get('technical_details', {})
        project.featured = project_json.get('featured', False)
        project.tags = project_json.get('tags', [])
        completion = parse_date(project_json.get('completion_date'))
        project.completion_date = completion.date() if completion else None
        project.client = project_json.get('client')
        project.status = project_json.get('status', 'completed')
        project.technologies = [technologies[name] for name in project_json.get('technologies', [])
                                if name in technologies]


def seed_posts(posts_data, authors):
    print(f"Seeding {len(posts_data)} posts...")
    for post_json in posts_data:
        slug = post_json.get('slug')
        if not slug:
            continue
        post = Post.query.filter_by(slug=slug).first()
        if not post:
            post = Post(slug=slug)
            db.session.add(post)
        post.sanity_id = post_json.get('sanity_id') or post.sanity_id
        post.title = post_json.get('title')
        post.excerpt = post_json.get('excerpt', '')
        post.cover_image = post_json.get('cover_image', '')
        post.content = post_json.get('content', [])
        post.date = parse_date(post_json.get('date'))
        post.status = post_json.get('status', 'published')
        post.author = authors.get(post_json.get('author'))


def seed_content(data):
    """Seed every document type from a seed dictionary and commit"""
    technologies = seed_technologies(data.get('technologies', []))
    seed_categories(data.get('categories', []))
    authors = seed_authors(data.get('authors', []))
    db.session.flush()
    seed_projects(data.get('projects', []), technologies)
    seed_posts(data.get('posts', []), authors)
    db.session.commit()
    print("[OK] Content seeded")


def main():
    """Main seed function"""
    from app import create_app

    print("=" * 60)
    print("Content Seed Script")
    print("=" * 60)

    app = create_app()
    with app.app_context():
        json_file = sys.argv[1] if len(sys.argv) > 1 else os.path.join(app.config['CONTENT_DIR'], 'seed.json')
        if not os.path.exists(json_file):
            print(f"Error: {json_file} not found!")
            return

        print(f"\nLoading data from {json_file}...")
        with open(json_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        db.create_all()
        seed_content(data)

        print("\n" + "=" * 60)
        print("Seeding completed successfully!")
        print("=" * 60)


if __name__ == '__main__':
    main()
