"""
Unit Tests for the link and redirect helpers
"""
from app.templating import page_url, redirect_back


class TestPageUrl:
    def test_blank_params_are_kept(self):
        assert page_url('/dashboard', {'branch': '', 'semester': ''}, folder='f1') == '/dashboard?branch=&semester=&folder=f1'

    def test_blank_extras_are_dropped(self):
        assert page_url('/dashboard', {'branch': 'Civil'}, folder=None, open='') == '/dashboard?branch=Civil'

    def test_no_params(self):
        assert page_url('/admin/manage') == '/admin/manage'


class TestRedirectBack:
    def test_keeps_view_and_replaces_messages(self):
        response = redirect_back('/admin/manage', 'q=lab&page=2&error=old', msg='Saved')
        assert response.status_code == 303
        assert response.headers['location'] == '/admin/manage?q=lab&page=2&msg=Saved'

    def test_none_drops_a_key(self):
        response = redirect_back('/admin/manage', 'folder=f1&branch=Civil', folder=None)
        assert response.headers['location'] == '/admin/manage?branch=Civil'

    def test_only_the_query_is_taken_from_the_form(self):
        response = redirect_back('/admin/manage', 'https://evil.example/?x=1')
        assert response.headers['location'].startswith('/admin/manage?')
