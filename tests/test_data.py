"""
Content Query Tests
===================
Pagination, project filters and ordering, post listing, and the seed loader.
"""
import pytest

from extensions import db
from models import Post, PortfolioProject, Technology
from migrations.seed_content import parse_date, seed_content
from utils.data import (
    count_portfolio_projects,
    count_posts,
    get_category_counts,
    get_featured_projects,
    get_more_posts,
    get_paginated_posts,
    get_portfolio_projects,
    get_post_by_slug,
    get_project_by_slug,
    get_technologies,
    load_resume,
    paginate,
)


def slugs(items):
    return [item['slug'] for item in items]


# ============================================================================
# PAGINATION
# ============================================================================

class TestPaginate:
    """Tests for paginate"""

    def test_first_page(self):
        result = paginate(1, 12, 30)
        assert result['offset'] == 0
        assert result['limit'] == 12
        assert result['total_pages'] == 3
        assert result['has_next'] is True
        assert result['has_prev'] is False
        assert (result['first_item'], result['last_item']) == (1, 12)

    def test_last_page(self):
        result = paginate('3', 12, 30)
        assert result['offset'] == 24
        assert result['has_next'] is False
        assert (result['first_item'], result['last_item']) == (25, 30)

    @pytest.mark.parametrize('page', [None, 'abc', '0', -4])
    def test_invalid_page_becomes_one(self, page):
        assert paginate(page, 6, 10)['page'] == 1

    def test_empty(self):
        result = paginate(1, 6, 0)
        assert result['total_pages'] == 0
        assert (result['first_item'], result['last_item']) == (0, 0)


# ============================================================================
# PORTFOLIO PROJECTS
# ============================================================================

class TestPortfolioProjects:
    """Tests for project listing queries"""

    def test_featured_first_then_newest(self, seeded):
        assert slugs(get_portfolio_projects()) == [
            'mobile-app-ui-design',
            'urban-photography-series',
            'ecommerce-platform',
            'brand-identity-animation',
            'sales-analytics-dashboard',
            'product-launch-video',
        ]

    def test_offset_and_limit(self, seeded):
        page = get_portfolio_projects(offset=2, limit=2)
        assert slugs(page) == ['ecommerce-platform', 'brand-identity-animation']

    def test_category_filter(self, seeded):
        assert slugs(get_portfolio_projects(category='photography')) == ['urban-photography-series']
        assert count_portfolio_projects(category='photography') == 1

    def test_featured_filter(self, seeded):
        assert count_portfolio_projects(featured=True) == 3

    def test_technology_filter_matches_any(self, seeded):
        projects = get_portfolio_projects(technologies=['Stripe', 'Python'])
        assert sorted(slugs(projects)) == ['ecommerce-platform', 'sales-analytics-dashboard']

    def test_search_matches_title_description_and_tags(self, seeded):
        assert slugs(get_portfolio_projects(search='urban')) == ['urban-photography-series']
        assert slugs(get_portfolio_projects(search='TABLEAU')) == ['sales-analytics-dashboard']

    def test_search_treats_wildcards_literally(self, seeded):
        assert count_portfolio_projects(search='%') == 0

    def test_filters_combine(self, seeded):
        assert count_portfolio_projects(category='coding', featured=True, search='commerce') == 1
        assert count_portfolio_projects(category='coding', search='photography') == 0

    def test_category_counts(self, seeded):
        counts = get_category_counts()
        assert counts['total'] == 6
        assert counts['coding'] == 1
        assert counts['creative'] == 1

    def test_category_counts_empty_store(self, app):
        counts = get_category_counts()
        assert counts['total'] == 0
        assert counts['design'] == 0

    def test_technologies_with_counts(self, seeded):
        technologies = {t['name']: t['project_count'] for t in get_technologies()}
        assert technologies['TypeScript'] == 1
        assert technologies['React'] == 0
        assert [t['name'] for t in get_technologies()][0] == 'Next.js'

    def test_featured_projects(self, seeded):
        assert slugs(get_featured_projects(limit=2)) == ['mobile-app-ui-design', 'urban-photography-series']

    def test_project_detail(self, seeded):
        project = get_project_by_slug('ecommerce-platform')
        assert project['completion_date'] == '2024-01-15'
        assert [t['name'] for t in project['technologies']] == ['Next.js', 'PostgreSQL', 'Stripe', 'TypeScript']
        assert project['description']
        assert project['related_projects'] == []

    def test_related_projects_same_category_featured(self, seeded):
        db.session.add(PortfolioProject(title='Second Shop', slug='second-shop', category='coding',
                                        featured=True))
        db.session.add(PortfolioProject(title='Side Script', slug='side-script', category='coding',
                                        featured=False))
        db.session.commit()

        related = get_project_by_slug('ecommerce-platform')['related_projects']
        assert [p['slug'] for p in related] == ['second-shop']

    def test_unknown_slug(self, seeded):
        assert get_project_by_slug('missing') is None


# ============================================================================
# POSTS
# ============================================================================

class TestPosts:
    """Tests for post queries"""

    def test_newest_first(self, seeded):
        assert slugs(get_paginated_posts()) == ['masonry-layouts-css-columns', 'portfolio-with-headless-cms']
        assert count_posts() == 2

    def test_drafts_and_slugless_posts_excluded(self, seeded):
        db.session.add(Post(title='Draft', slug='draft', status='draft'))
        db.session.add(Post(title='No slug', slug=None))
        db.session.commit()
        assert count_posts() == 2

    def test_untitled_fallback_and_author(self, seeded):
        db.session.add(Post(slug='untitled-post'))
        db.session.commit()
        post = get_post_by_slug('untitled-post')
        assert post['title'] == 'Untitled'
        assert post['date'] is not None
        assert post['author'] is None

        post = get_post_by_slug('portfolio-with-headless-cms')
        assert post['author']['first_name'] == 'Site'
        assert post['content']

    def test_more_posts_skips_current(self, seeded):
        current = get_post_by_slug('masonry-layouts-css-columns')
        more = get_more_posts(skip_id=current['id'], limit=2)
        assert slugs(more) == ['portfolio-with-headless-cms']


# ============================================================================
# SEEDING AND RESUME
# ============================================================================

class TestSeedContent:
    """Tests for the seed loader"""

    def test_seed_is_idempotent(self, seeded, seed_data):
        seed_content(seed_data)
        assert PortfolioProject.query.count() == 6
        assert Technology.query.count() == 6
        assert Post.query.count() == 2

    def test_unknown_category_skipped(self, app):
        seed_content({'projects': [{'title': 'Odd', 'slug': 'odd', 'category': 'pottery'}]})
        assert PortfolioProject.query.count() == 0

    def test_parse_date(self):
        assert parse_date('2024-05-02T09:00:00Z').day == 2
        assert parse_date('2024-01-15').year == 2024
        assert parse_date('soon') is None
        assert parse_date(None) is None


class TestResume:
    """Tests for load_resume"""

    def test_bundled_resume(self, app):
        resume = load_resume()
        assert resume['name']
        assert resume['experience']

    def test_missing_resume(self, app, tmp_path):
        app.config['CONTENT_DIR'] = str(tmp_path)
        assert load_resume() is None

    def test_invalid_resume(self, app, tmp_path):
        (tmp_path / 'resume.json').write_text('{not json', encoding='utf-8')
        app.config['CONTENT_DIR'] = str(tmp_path)
        assert load_resume() is None
