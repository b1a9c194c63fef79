from __future__ import annotations

import logging
from pathlib import Path

import pytest

from confinement.confine.builtin import (
    ExistsConfine,
    FalseConfine,
    FeatureConfine,
    MethodsConfine,
    TrueConfine,
    VariableConfine,
)
from confinement.errors import DefinitionError
from confinement.host.environment import LocalHost, StaticHost


class _Provider:
    name_attr = "not callable"

    def install(self) -> None: ...

    @property
    def prop(self) -> int:
        return 1

    def _private(self) -> None: ...


class TestConfineValues:
    def test_scalar_value_is_converted_to_list(self) -> None:
        assert TrueConfine("somevalue").values == ["somevalue"]

    def test_tuple_value_is_converted_to_list(self) -> None:
        assert MethodsConfine(("one", "two")).values == ["one", "two"]

    def test_values_are_required(self) -> None:
        with pytest.raises(TypeError):
            MethodsConfine()  # type: ignore[call-arg]

    def test_empty_values_are_rejected(self) -> None:
        with pytest.raises(DefinitionError):
            TrueConfine([])

    def test_copy_is_independent(self) -> None:
        original = ExistsConfine(["/a"], label="pkg.apt", for_binary=True)
        copied = original.copy()
        copied.values.append("/b")

        assert copied is not original
        assert original.values == ["/a"]
        assert copied.label == "pkg.apt"
        assert copied.for_binary is True

    def test_copy_keeps_fact_name(self) -> None:
        copied = VariableConfine("debian", name="osfamily").copy()
        assert isinstance(copied, VariableConfine)
        assert copied.name == "osfamily"


class TestOutcomeVector:
    def test_results_are_kept_after_valid(self) -> None:
        confine = TrueConfine([True, False])
        assert confine.valid() is False
        assert confine.results() == [True, False]

    def test_results_reuse_last_evaluation_until_reset(self) -> None:
        calls = []

        def predicate() -> bool:
            calls.append(1)
            return True

        confine = TrueConfine(predicate)
        confine.valid()
        confine.results()
        assert len(calls) == 1

        confine.reset()
        confine.results()
        assert len(calls) == 2

    def test_failing_value_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="confinement.confine.base")
        TrueConfine(False, label="package.holdable").valid()
        assert "package.holdable: false value when expecting true" in caplog.text


class TestTrueConfine:
    def test_passes_when_all_values_truthy(self) -> None:
        assert TrueConfine([1, "yes", True]).valid() is True

    def test_fails_when_any_value_falsy(self) -> None:
        assert TrueConfine([1, 0]).valid() is False

    def test_callables_are_evaluated_at_check_time(self) -> None:
        state = {"ready": False}
        confine = TrueConfine(lambda: state["ready"])

        assert confine.valid() is False
        state["ready"] = True
        assert confine.valid() is True

    def test_summarize_counts_failing_values(self) -> None:
        confines = [TrueConfine([True, False]), TrueConfine(False), TrueConfine(True)]
        assert TrueConfine.summarize(confines) == 2

    def test_summarize_nothing_is_zero(self) -> None:
        assert TrueConfine.summarize([]) == 0


class TestFalseConfine:
    def test_passes_when_all_values_falsy(self) -> None:
        assert FalseConfine([0, "", None, False]).valid() is True

    def test_fails_when_any_value_truthy(self) -> None:
        assert FalseConfine([False, "x"]).valid() is False

    def test_message(self) -> None:
        assert FalseConfine(True).message(True) == "true value when expecting false"

    def test_summarize_counts_failing_values(self) -> None:
        confines = [FalseConfine([True, True]), FalseConfine(False)]
        assert FalseConfine.summarize(confines) == 2


class TestExistsConfine:
    def test_existing_path_passes(self) -> None:
        env = StaticHost(paths={"/etc/hosts"})
        assert ExistsConfine("/etc/hosts", environment=env).valid() is True

    def test_missing_path_fails(self) -> None:
        env = StaticHost(paths={"/etc/hosts"})
        assert ExistsConfine(["/etc/hosts", "/nope"], environment=env).valid() is False

    def test_empty_value_fails(self) -> None:
        env = StaticHost(paths={""})
        assert ExistsConfine("", environment=env).valid() is False

    def test_path_objects_are_accepted(self) -> None:
        env = StaticHost(paths={str(Path("/etc/hosts"))})
        assert ExistsConfine(Path("/etc/hosts"), environment=env).valid() is True

    def test_for_binary_looks_up_search_path(self) -> None:
        env = StaticHost(binaries={"apt-get": "/usr/bin/apt-get"})
        assert ExistsConfine("apt-get", for_binary=True, environment=env).valid() is True
        assert ExistsConfine("apt-get", environment=env).valid() is False

    def test_uses_process_default_environment(self, static_host: StaticHost) -> None:
        assert ExistsConfine("/etc/hosts").valid() is True
        assert ExistsConfine("/missing").valid() is False

    def test_against_local_filesystem(self, tmp_path: Path) -> None:
        present = tmp_path / "present"
        present.write_text("")
        env = LocalHost()

        assert ExistsConfine(str(present), environment=env).valid() is True
        assert ExistsConfine(str(tmp_path / "absent"), environment=env).valid() is False

    def test_messages(self) -> None:
        assert ExistsConfine("/x").message("/x") == "file /x does not exist"
        assert "search path" in ExistsConfine("tool", for_binary=True).message("tool")

    def test_summarize_lists_missing_values_across_confines(self) -> None:
        env = StaticHost(paths={"/a"})
        confines = [ExistsConfine(["/a", "/b"], environment=env), ExistsConfine("/c", environment=env)]
        assert ExistsConfine.summarize(confines) == ["/b", "/c"]


class TestMethodsConfine:
    def test_instance_with_method_passes(self) -> None:
        assert MethodsConfine("install").valid(_Provider()) is True

    def test_instance_without_method_fails(self) -> None:
        assert MethodsConfine(["install", "uninstall"]).valid(_Provider()) is False

    def test_non_callable_attribute_fails(self) -> None:
        assert MethodsConfine("name_attr").valid(_Provider()) is False

    def test_class_must_define_public_method(self) -> None:
        assert MethodsConfine("install").valid(_Provider) is True
        assert MethodsConfine("prop").valid(_Provider) is False
        assert MethodsConfine("_private").valid(_Provider) is False
        assert MethodsConfine("missing").valid(_Provider) is False

    def test_instance_callable_attribute_counts_for_instance_only(self) -> None:
        obj = _Provider()
        obj.dynamic = lambda: None  # type: ignore[attr-defined]

        assert MethodsConfine("dynamic").valid(obj) is True
        assert MethodsConfine("dynamic").valid(_Provider) is False

    def test_summarize_returns_union_of_missing_methods(self) -> None:
        confines = [
            MethodsConfine(["one", "two"]),
            MethodsConfine(["two"]),
            MethodsConfine(["three", "four"]),
        ]
        assert sorted(MethodsConfine.summarize(confines, object())) == sorted(["one", "two", "three", "four"])

    def test_summarize_deduplicates_in_first_seen_order(self) -> None:
        confines = [MethodsConfine(["one", "two"]), MethodsConfine(["two", "three"])]
        assert MethodsConfine.summarize(confines, object()) == ["one", "two", "three"]

    def test_summarize_skips_present_methods(self) -> None:
        confines = [MethodsConfine(["install", "purge"])]
        assert MethodsConfine.summarize(confines, _Provider()) == ["purge"]


class TestFeatureConfine:
    def test_available_feature_passes(self) -> None:
        env = StaticHost(features={"posix"})
        assert FeatureConfine("posix", environment=env).valid() is True

    def test_missing_feature_fails(self) -> None:
        env = StaticHost(features={"posix"})
        assert FeatureConfine(["posix", "root"], environment=env).valid() is False

    def test_message(self) -> None:
        assert FeatureConfine("root").message("root") == "feature root is missing"

    def test_summarize_returns_union_of_missing_features(self) -> None:
        env = StaticHost(features={"posix"})
        confines = [
            FeatureConfine(["root", "posix"], environment=env),
            FeatureConfine(["root", "ssl"], environment=env),
        ]
        assert FeatureConfine.summarize(confines) == ["root", "ssl"]


class TestVariableConfine:
    env = StaticHost(facts={"osfamily": "Debian", "is_root": True})

    def test_matches_any_value_case_insensitively(self) -> None:
        assert VariableConfine(["redhat", "debian"], name="osfamily", environment=self.env).valid() is True

    def test_no_matching_value_fails(self) -> None:
        assert VariableConfine(["redhat", "suse"], name="osfamily", environment=self.env).valid() is False

    def test_missing_fact_fails(self) -> None:
        assert VariableConfine("anything", name="no_such_fact", environment=self.env).valid() is False

    def test_fact_name_is_case_insensitive(self) -> None:
        assert VariableConfine("debian", name="OSFamily", environment=self.env).valid() is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, True),
            (False, False),
            ("true", True),
            ("FALSE", False),
            ("yes", False),
        ],
    )
    def test_boolean_fact(self, value: object, expected: bool) -> None:
        assert VariableConfine(value, name="is_root", environment=self.env).valid() is expected

    def test_message_reports_fact_and_accepted_values(self) -> None:
        confine = VariableConfine(["redhat", "suse"], name="osfamily", environment=self.env)
        assert confine.message("redhat") == "fact value 'Debian' for 'osfamily' not in required list 'redhat,suse'"

    def test_summarize_maps_fact_to_required_values(self) -> None:
        confines = [
            VariableConfine("redhat", name="osfamily", environment=self.env),
            VariableConfine("debian", name="osfamily", environment=self.env),
            VariableConfine(False, name="is_root", environment=self.env),
        ]
        assert VariableConfine.summarize(confines) == {"osfamily": ["redhat"], "is_root": [False]}
