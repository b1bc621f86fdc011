"""
Unit tests for Reconciler and the per-collection resets on DataMem.
"""
import pytest
from borga.errors import InternalInconsistency


class TestReconcile:
    """Tests for reconcile method."""

    def test_strips_id_from_every_user(self, services, alice, bob, sample_group):
        """Should remove the id from every user holding it."""
        services.attach_group('bob', sample_group)

        detached = services.reconciler.reconcile(sample_group)

        assert detached == 2
        assert services.get_user('alice').groups == []
        assert services.get_user('bob').groups == []

    def test_ignores_users_without_reference(self, services, alice, bob, sample_group):
        """Users that never referenced the group are not an error."""
        assert services.reconciler.reconcile(sample_group) == 1
        assert services.get_user('bob').groups == []

    def test_unknown_group(self, services, alice, bob):
        """Should detach nobody for an id no user holds."""
        assert services.reconciler.reconcile(404) == 0

    def test_leaves_other_ids(self, services, alice):
        """Should keep the user's other group ids in order."""
        first = services.create_group('alice', 'A', 'a')
        second = services.create_group('alice', 'B', 'b')

        services.reconciler.reconcile(first)

        assert services.get_user('alice').groups == [second]

    def test_post_condition_failure(self, services, alice, sample_group, mocker):
        """A detach that silently does nothing should surface as an inconsistency."""
        mocker.patch.object(services.users, 'detach_group', return_value=True)

        with pytest.raises(InternalInconsistency):
            services.reconciler.reconcile(sample_group)


class TestResets:
    """Each clear should wipe exactly one collection."""

    def test_clear_users(self, services, alice, sample_group):
        """Should empty users without touching groups or tokens."""
        services.clear_users()

        assert services.list_users() == []
        assert services.group_exists(sample_group) is True
        assert services.resolve_token(alice) == 'alice'

    def test_clear_groups(self, services, alice, sample_group):
        """Should empty groups without touching users or tokens."""
        services.clear_groups()

        assert services.list_groups() == []
        assert services.user_exists('alice') is True
        assert services.resolve_token(alice) == 'alice'

    def test_clear_tokens(self, services, alice, sample_group):
        """Should empty tokens without touching users or groups."""
        services.clear_tokens()

        assert services.resolve_token(alice) is None
        assert services.user_exists('alice') is True
        assert services.group_exists(sample_group) is True
