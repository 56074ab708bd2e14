import os
import sys

import pytest

from winfs_injector.release_creator import ReleaseCreationError, ReleaseCreator


class RecordingRunner:
    def __init__(self, fail_on=None):
        self.calls = []
        self.home_existed = []
        self.fail_on = fail_on

    def __call__(self, args, env):
        self.calls.append((list(args), dict(env)))
        self.home_existed.append(os.path.isdir(env.get("HOME", "")))
        if self.fail_on is not None and args[0] == self.fail_on:
            raise ReleaseCreationError(f"{args[0]} failed")


def _arguments(tarball_path="out/release.tgz", version="9.3.6"):
    return (
        "windows2019fs",
        "cloudfoundry/windows2016fs",
        "/release/dir",
        tarball_path,
        "2019.0.43",
        "/path/to/docker/registry",
        version,
    )


def test_fetches_image_then_creates_release():
    runner = RecordingRunner()
    creator = ReleaseCreator(hydrate_command="hyd", bosh_command="bsh", runner=runner)
    creator.create_release(*_arguments())
    assert [call[0][0] for call in runner.calls] == ["hyd", "bsh"]

    hydrate_args = runner.calls[0][0]
    assert "download" in hydrate_args
    assert os.path.join("/release/dir", "blobs", "windows2019fs") in hydrate_args
    assert {"cloudfoundry/windows2016fs", "2019.0.43", "/path/to/docker/registry"} <= set(
        hydrate_args
    )

    bosh_args = runner.calls[1][0]
    assert "create-release" in bosh_args
    assert {"/release/dir", "9.3.6", os.path.abspath("out/release.tgz")} <= set(bosh_args)


def test_home_is_temporary_and_removed():
    runner = RecordingRunner()
    creator = ReleaseCreator(hydrate_command="hyd", bosh_command="bsh", runner=runner)
    creator.create_release(*_arguments())
    home = runner.calls[1][1]["HOME"]
    assert runner.home_existed[1] is True
    assert not os.path.exists(home)
    assert home != os.environ.get("HOME")


def test_no_tarball_argument_when_path_empty():
    runner = RecordingRunner()
    creator = ReleaseCreator(hydrate_command="hyd", bosh_command="bsh", runner=runner)
    creator.create_release(*_arguments(tarball_path=""))
    bosh_args = runner.calls[1][0]
    assert "create-release" in bosh_args
    assert "--tarball" not in bosh_args


def test_invalid_version_stops_before_release_creation():
    runner = RecordingRunner()
    creator = ReleaseCreator(hydrate_command="hyd", bosh_command="bsh", runner=runner)
    with pytest.raises(ValueError, match="not a version!"):
        creator.create_release(*_arguments(version="not a version!"))
    assert [call[0][0] for call in runner.calls] == ["hyd"]


def test_image_fetch_failure_propagates():
    runner = RecordingRunner(fail_on="hyd")
    creator = ReleaseCreator(hydrate_command="hyd", bosh_command="bsh", runner=runner)
    with pytest.raises(ReleaseCreationError, match="hyd failed"):
        creator.create_release(*_arguments())
    assert len(runner.calls) == 1


def test_release_creation_failure_propagates():
    runner = RecordingRunner(fail_on="bsh")
    creator = ReleaseCreator(hydrate_command="hyd", bosh_command="bsh", runner=runner)
    with pytest.raises(ReleaseCreationError, match="bsh failed"):
        creator.create_release(*_arguments())
    assert len(runner.calls) == 2


def test_default_runner_reports_failing_command(tmp_path):
    creator = ReleaseCreator(hydrate_command=sys.executable, bosh_command=sys.executable)
    with pytest.raises(ReleaseCreationError, match="exited with status"):
        creator.create_release(
            "rel", "image", str(tmp_path), "", "1.0.0", "registry", "1.0.0"
        )


def test_default_runner_reports_missing_program(tmp_path):
    missing = str(tmp_path / "no-such-program")
    creator = ReleaseCreator(hydrate_command=missing)
    with pytest.raises(ReleaseCreationError, match="unable to run"):
        creator.create_release(
            "rel", "image", str(tmp_path), "", "1.0.0", "registry", "1.0.0"
        )