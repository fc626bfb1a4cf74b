"""Test the clean executor."""

from unittest.mock import Mock

import pytest

from shipper_clean.core.cleaner import ReleaseCleaner
from shipper_clean.errors import StoreError
from shipper_clean.model.action import ActionType

from conftest import make_application, make_release


@pytest.fixture
def fleet(store):
    """Two applications over two namespaces with kube-2 and kube-3 gone."""
    store.add_application(make_application("app", "team-a"))
    store.add_release(make_release("app-0", "team-a", generation=0, clusters="kube-2"))
    store.add_release(make_release("app-1", "team-a", generation=1, clusters="kube-1,kube-2"))
    store.add_release(make_release("app-2", "team-a", generation=2, clusters="kube-3"))

    store.add_application(make_application("web", "team-b"))
    store.add_release(make_release("web-0", "team-b", app="web", generation=0, clusters="kube-1"))
    return store


class TestReleaseCleaner:
    def test_run(self, fleet, config, output):
        console, buffer = output
        result = ReleaseCleaner(fleet, config, console=console).run()

        assert result.ok
        assert result.processed == 4
        assert [u.key for u in fleet.updated] == ["team-a/app-1"]
        assert fleet.updated[0].recorded_clusters == "kube-1"
        # app-2 is the contender and stays even though kube-3 is gone
        assert fleet.deleted == ["team-a/app-0"]

        actions = {d.name: d.action.type for d in result.decisions}
        assert actions == {
            "app-0": ActionType.DELETE,
            "app-1": ActionType.REANNOTATE,
            "app-2": ActionType.NOOP,
            "web-0": ActionType.NOOP,
        }
        assert buffer.getvalue().splitlines() == [
            "Deleting release team-a/app-0...done",
            "Editing annotations of release team-a/app-1 to kube-1...done",
        ]

    def test_second_run_is_noop(self, fleet, config, output):
        console, _ = output
        ReleaseCleaner(fleet, config, console=console).run()
        fleet.updated.clear()
        fleet.deleted.clear()

        result = ReleaseCleaner(fleet, config, console=console).run()

        assert result.ok
        assert all(d.action.type == ActionType.NOOP for d in result.decisions)
        assert fleet.updated == []
        assert fleet.deleted == []

    def test_dry_run_writes_nothing(self, fleet, config, dry_run_config, output):
        console, buffer = output
        store = Mock(wraps=fleet)

        result = ReleaseCleaner(store, dry_run_config, console=console).run()

        store.update_release.assert_not_called()
        store.delete_release.assert_not_called()
        assert [d.action.type for d in result.decisions if d.action.is_write] == [
            ActionType.DELETE,
            ActionType.REANNOTATE,
        ]
        assert buffer.getvalue().splitlines() == [
            "Deleting release team-a/app-0...dryrun",
            "Editing annotations of release team-a/app-1 to kube-1...dryrun",
        ]

    def test_dry_run_decisions_match_real_run(self, fleet, config, dry_run_config, output):
        console, _ = output
        dry = ReleaseCleaner(fleet, dry_run_config, console=console).run()
        real = ReleaseCleaner(fleet, config, console=console).run()

        assert dry.decisions == real.decisions

    def test_write_failures_do_not_stop_the_run(self, fleet, config, output):
        console, buffer = output
        fleet.fail_write = {"team-a/app-0", "team-a/app-1"}

        result = ReleaseCleaner(fleet, config, console=console).run()

        assert result.processed == 4
        assert [e.item for e in result.errors] == ["team-a/app-0", "team-a/app-1"]
        assert "cannot delete team-a/app-0" in result.errors[0].message
        assert "failed" in buffer.getvalue()

    def test_missing_contender_is_recorded(self, store, config, output):
        console, _ = output
        # No application object for this release
        store.add_release(make_release("orphan-0", app="orphan", clusters="kube-2"))
        store.add_release(make_release("app-0", clusters="kube-1,kube-3"))

        result = ReleaseCleaner(store, config, console=console).run()

        assert [e.item for e in result.errors] == ["team-a/orphan-0"]
        assert "not found" in result.errors[0].message
        assert store.deleted == []
        assert [u.key for u in store.updated] == ["team-a/app-0"]

    def test_list_failure_skips_namespace(self, fleet, config, output):
        console, _ = output
        fleet.fail_list = {"team-a"}

        result = ReleaseCleaner(fleet, config, console=console).run()

        assert [e.item for e in result.errors] == ["team-a"]
        assert result.processed == 1

    def test_namespace_listing_failure_is_fatal(self, config, output):
        console, _ = output
        store = Mock()
        store.list_namespaces.side_effect = StoreError("forbidden")

        with pytest.raises(StoreError):
            ReleaseCleaner(store, config, console=console).run()
