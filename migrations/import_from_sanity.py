"""
Import Script: Sanity dataset to content store
Pulls technologies, categories, authors, projects and posts from the configured
Sanity project and upserts them through the seed helpers.

Usage:
    python migrations/import_from_sanity.py          # import everything
    python migrations/import_from_sanity.py --check  # only print document counts
"""

import os
import sys
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.sanity import SanityClient, ContentStoreError, check_connection
from migrations.seed_content import seed_content

TECHNOLOGIES_QUERY = '''*[_type == "technology"] | order(name asc) {
  _id, name, "slug": slug.current, category, description, color, icon, website, featured
}'''

CATEGORIES_QUERY = '''*[_type == "projectCategory"] | order(order asc) {
  _id, name, "slug": slug.current, description, color, icon, order, featured, active
}'''

AUTHORS_QUERY = '''*[_type == "author"] {
  _id, firstName, lastName, "picture": picture.asset->url
}'''

PROJECTS_QUERY = '''*[_type == "portfolioProject" && defined(slug.current)] {
  _id, title, "slug": slug.current, category, shortDescription, description,
  heroMedia, gallery, technicalDetails, featured, tags, completionDate, client, status,
  "technologyIds": technologies[]._ref
}'''

POSTS_QUERY = '''*[_type == "post" && defined(slug.current)] {
  _id, title, "slug": slug.current, excerpt, "coverImage": coverImage.asset->url,
  content, date, "authorId": author._ref
}'''


def _technology(doc):
    return {
        'sanity_id': doc['_id'],
        'name': doc.get('name'),
        'slug': doc.get('slug'),
        'category': doc.get('category') or 'other',
        'description': doc.get('description') or '',
        'color': doc.get('color') or '',
        'icon': doc.get('icon') or '',
        'website': doc.get('website') or '',
        'featured': bool(doc.get('featured')),
    }


def _category(doc):
    return {
        'sanity_id': doc['_id'],
        'name': doc.get('name'),
        'slug': doc.get('slug'),
        'description': doc.get('description') or '',
        'color': doc.get('color') or '',
        'icon': doc.get('icon') or '',
        'order': doc.get('order') or 0,
        'featured': bool(doc.get('featured')),
        'active': doc.get('active', True) is not False,
    }


def _author(doc):
    return {
        'key': doc['_id'],
        'sanity_id': doc['_id'],
        'first_name': doc.get('firstName'),
        'last_name': doc.get('lastName') or '',
        'picture': doc.get('picture') or '',
    }


def _project(doc, technology_names):
    return {
        'sanity_id': doc['_id'],
        'title': doc.get('title'),
        'slug': doc.get('slug'),
        'category': doc.get('category'),
        'short_description': doc.get('shortDescription') or '',
        'description': doc.get('description') or [],
        'hero_media': doc.get('heroMedia') or {'type': 'image'},
        'gallery': doc.get('gallery') or [],
        'technical_details': doc.get('technicalDetails') or {},
        'featured': bool(doc.get('featured')),
        'tags': doc.get('tags') or [],
        'completion_date': doc.get('completionDate'),
        'client': doc.get('client'),
        'status': doc.get('status') or 'completed',
        'technologies': [technology_names[ref] for ref in doc.get('technologyIds') or []
                         if ref in technology_names],
    }


def _post(doc):
    return {
        'sanity_id': doc['_id'],
        'title': doc.get('title'),
        'slug': doc.get('slug'),
        'excerpt': doc.get('excerpt') or '',
        'cover_image': doc.get('coverImage') or '',
        'content': doc.get('content') or [],
        'date': doc.get('date'),
        'author': doc.get('authorId'),
    }


def fetch_documents(client):
    """Fetch every document type and convert it to the seed format"""
    technologies = client.fetch(TECHNOLOGIES_QUERY) or []
    technology_names = {doc['_id']: doc.get('name') for doc in technologies if doc.get('name')}

    return {
        'technologies': [_technology(doc) for doc in technologies],
        'categories': [_category(doc) for doc in client.fetch(CATEGORIES_QUERY) or []],
        'authors': [_author(doc) for doc in client.fetch(AUTHORS_QUERY) or []],
        'projects': [_project(doc, technology_names) for doc in client.fetch(PROJECTS_QUERY) or []],
        'posts': [_post(doc) for doc in client.fetch(POSTS_QUERY) or []],
    }


def main(argv=None):
    """Main import function"""
    from app import create_app
    from extensions import db

    parser = argparse.ArgumentParser(description='Import content from a Sanity dataset')
    parser.add_argument('--check', action='store_true', help='only print document counts')
    args = parser.parse_args(argv)

    print("=" * 60)
    print("Sanity Import Script")
    print("=" * 60)

    app = create_app()
    with app.app_context():
        client = SanityClient.from_config(app.config)
        if client is None:
            print("Error: SANITY_PROJECT_ID and SANITY_DATASET must be set")
            return 1

        try:
            counts = check_connection(client)
            print(f"\nConnected to {client.project_id}/{client.dataset}")
            for doc_type, count in counts.items():
                print(f"  {doc_type}: {count}")
            if args.check:
                return 0

            data = fetch_documents(client)
        except ContentStoreError as e:
            print(f"Error: {str(e)}")
            return 1

        db.create_all()
        seed_content(data)

        print("\n" + "=" * 60)
        print("Import completed successfully!")
        print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
