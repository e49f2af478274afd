"""
Portfolio Endpoint Tests
========================
Integration tests for /portfolio, /portfolio/<slug> and /portfolio/layout.json.
"""
from unittest import mock

from sqlalchemy.exc import OperationalError


# ============================================================================
# LISTING
# ============================================================================

class TestPortfolioIndex:
    """Tests for GET /portfolio"""

    def test_lists_projects(self, client, seeded):
        response = client.get('/portfolio')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'E-commerce Platform' in html
        assert 'Showing 1-6 of 6 projects' in html

    def test_server_render_without_width_uses_grid(self, client, seeded):
        html = client.get('/portfolio').get_data(as_text=True)
        assert 'data-mode="grid"' in html
        assert 'grid-template-columns: repeat(3, 1fr)' in html
        assert 'masonry__item--pending' not in html

    def test_viewport_hint_selects_masonry_columns(self, client, seeded):
        response = client.get('/portfolio', headers={'Sec-CH-Viewport-Width': '500'})
        html = response.get_data(as_text=True)
        assert 'data-mode="masonry"' in html
        assert 'data-columns="1"' in html
        assert 'column-count: 1' in html
        assert 'masonry__item--pending' not in html

    def test_grid_layout_ignores_viewport_hint(self, client, seeded):
        response = client.get('/portfolio?layout=grid', headers={'Viewport-Width': '500'})
        assert 'data-mode="grid"' in response.get_data(as_text=True)

    def test_non_finite_viewport_hint_falls_back_to_grid(self, client, seeded):
        response = client.get('/portfolio', headers={'Sec-CH-Viewport-Width': 'inf'})
        assert response.status_code == 200
        assert 'data-mode="grid"' in response.get_data(as_text=True)

    def test_category_filter(self, client, seeded):
        html = client.get('/portfolio?category=photography').get_data(as_text=True)
        assert 'Urban Photography Series' in html
        assert 'E-commerce Platform' not in html

    def test_unknown_category_is_ignored(self, client, seeded):
        html = client.get('/portfolio?category=pottery').get_data(as_text=True)
        assert 'Showing 1-6 of 6 projects' in html

    def test_search_and_technology_filters(self, client, seeded):
        html = client.get('/portfolio?tech=Python').get_data(as_text=True)
        assert 'Sales Analytics Dashboard' in html
        assert 'Showing 1-1 of 1 projects' in html

        html = client.get('/portfolio?search=urban').get_data(as_text=True)
        assert 'Urban Photography Series' in html
        assert 'Mobile App UI Design' not in html

    def test_featured_filter(self, client, seeded):
        html = client.get('/portfolio?featured=true').get_data(as_text=True)
        assert 'Showing 1-3 of 3 projects' in html

    def test_no_results(self, client, seeded):
        html = client.get('/portfolio?search=nothing-matches-this').get_data(as_text=True)
        assert 'No projects found' in html

    def test_pagination_keeps_filters(self, app, client, seeded):
        app.config['PROJECTS_PER_PAGE'] = 2
        html = client.get('/portfolio?featured=true').get_data(as_text=True)
        assert 'Showing 1-2 of 3 projects' in html
        assert 'featured=true' in html
        assert 'page=2' in html

        html = client.get('/portfolio?featured=true&page=2').get_data(as_text=True)
        assert 'Showing 3-3 of 3 projects' in html

    def test_category_counts_in_sidebar(self, client, seeded):
        html = client.get('/portfolio').get_data(as_text=True)
        assert 'All <span>6</span>' in html

    def test_query_failure_returns_404(self, client, seeded):
        with mock.patch('blueprints.portfolio.routes.count_portfolio_projects',
                        side_effect=OperationalError('SELECT', {}, Exception('down'))):
            response = client.get('/portfolio')
        assert response.status_code == 404


# ============================================================================
# DETAIL
# ============================================================================

class TestProjectDetail:
    """Tests for GET /portfolio/<slug>"""

    def test_detail(self, client, seeded):
        response = client.get('/portfolio/ecommerce-platform')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert 'E-commerce Platform' in html
        assert 'Coding Project' in html
        assert '<p>Built a complete storefront' in html

    def test_unknown_slug_returns_404(self, client, seeded):
        assert client.get('/portfolio/does-not-exist').status_code == 404


# ============================================================================
# LAYOUT JSON
# ============================================================================

class TestLayoutJson:
    """Tests for GET /portfolio/layout.json"""

    def test_masonry_layout_for_width(self, client):
        response = client.get('/portfolio/layout.json?width=900&count=4')
        assert response.status_code == 200
        data = response.get_json()
        assert data['mode'] == 'masonry'
        assert data['breakpoint'] == 'md'
        assert data['columns'] == 2
        assert data['gap'] == 24
        assert len(data['items']) == 4
        assert all(item['visible'] for item in data['items'])

    def test_fallback_without_width(self, client):
        data = client.get('/portfolio/layout.json?count=2').get_json()
        assert data['mode'] == 'grid'
        assert data['breakpoint'] == 'lg'
        assert data['columns'] == 3

    def test_invalid_parameters(self, client):
        assert client.get('/portfolio/layout.json?width=wide').status_code == 400
        assert client.get('/portfolio/layout.json?count=-1').status_code == 400
        assert client.get('/portfolio/layout.json?count=501').status_code == 400
        response = client.get('/portfolio/layout.json?width=0')
        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_skeleton_heights(self, client):
        data = client.get('/portfolio/layout.json?width=900&count=3').get_json()
        assert data['skeleton'] == [200, 250, 300]

    def test_default_skeleton_without_items(self, client):
        data = client.get('/portfolio/layout.json').get_json()
        assert data['items'] == []
        assert data['skeleton'] == [200, 250, 300, 350, 280, 320]
