"""Tests for the model double."""

import asyncio

import pytest

from orm_doubles import (
    CallbackCapture,
    ManualScheduler,
    ModelDouble,
    ModelDoubleOptions,
    SaveOptions,
    create_model_double,
    run_pending,
)


class TestModelDoubleFields:
    """Test record fields on the model double."""

    def test_props_available_immediately(self):
        """Test props are attributes right after construction."""
        model = create_model_double({"props": {"a": 1, "b": "x"}})

        assert model.a == 1
        assert model.b == "x"

    def test_no_options(self):
        """Test factory accepts no options."""
        model = create_model_double()

        assert isinstance(model, ModelDouble)
        assert model.fields() == {}

    def test_fields_exclude_operations(self, user_props):
        """Test fields() lists record fields only."""
        model = create_model_double({"props": user_props})

        assert model.fields() == user_props

    def test_item_access(self, user_props):
        """Test fields are readable by key."""
        model = create_model_double({"props": user_props})

        assert model["name"] == "Alice"
        assert "email" in model
        assert "save" not in model
        with pytest.raises(KeyError):
            model["missing"]

    def test_props_named_like_operations_are_overridden(self):
        """Test destroy/save props do not replace the operations."""
        model = create_model_double({"props": {"save": "nope", "destroy": 1}})

        assert callable(model.save)
        assert callable(model.destroy)

    def test_prop_named_fields_shadows_method(self):
        """Test a fields prop wins over the fields() method."""
        model = create_model_double({"props": {"fields": 3, "id": 1}})

        assert model.fields == 3
        assert model["fields"] == 3
        assert ModelDouble.fields(model) == {"fields": 3, "id": 1}

    def test_reserved_names_skipped(self):
        """Test dunder props are ignored."""
        model = create_model_double({"props": {"__class__": "x", "ok": True}})

        assert type(model) is ModelDouble
        assert model.ok is True

    def test_fields_can_be_reassigned(self, user_props):
        """Test callers can mutate fields freely."""
        model = create_model_double({"props": user_props})
        model.name = "Alicia"
        model.age = 31

        assert model.fields()["name"] == "Alicia"
        assert model.age == 31

    def test_repr_lists_fields(self):
        """Test repr shows record fields."""
        model = create_model_double({"props": {"id": 7}})

        assert repr(model) == "ModelDouble(id=7)"

    def test_repr_handles_self_reference(self):
        """Test repr does not recurse into itself."""
        model = create_model_double()
        model.me = model

        assert "..." in repr(model)


class TestModelDoubleDestroy:
    """Test the destroy operation."""

    @pytest.mark.asyncio
    async def test_configured_error(self, capture):
        """Test destroy reports the configured error."""
        model = create_model_double({"destroy": {"err": "boom"}})

        model.destroy(capture)

        assert await capture.wait() == ("boom",)

    @pytest.mark.asyncio
    async def test_no_error(self, capture):
        """Test destroy reports None without configuration."""
        model = create_model_double()

        model.destroy(capture)

        assert await capture.wait() == (None,)

    @pytest.mark.asyncio
    async def test_callback_is_deferred(self, capture):
        """Test destroy never calls back synchronously."""
        model = create_model_double()

        model.destroy(capture)
        assert not capture.called

        await asyncio.sleep(0)
        assert capture.call_count == 1

    @pytest.mark.asyncio
    async def test_called_exactly_once(self, capture):
        """Test one destroy call invokes the callback once."""
        model = create_model_double({"destroy": {"err": ValueError("gone")}})

        model.destroy(capture)
        for _ in range(3):
            await asyncio.sleep(0)

        assert capture.call_count == 1
        assert isinstance(capture.err, ValueError)

    def test_fields_untouched(self, manual_scheduler, capture, user_props):
        """Test destroy leaves record fields alone."""
        model = create_model_double({"props": user_props})

        model.destroy(capture)
        manual_scheduler.run_pending()

        assert model.fields() == user_props


class TestModelDoubleSave:
    """Test the save operation."""

    @pytest.mark.asyncio
    async def test_configured_error_wins_over_result(self, capture):
        """Test save error discards a configured result."""
        model = create_model_double({"save": {"err": "boom", "result": {"id": 1}}})

        model.save(capture)

        assert await capture.wait() == ("boom", None)

    @pytest.mark.asyncio
    async def test_configured_result(self, capture):
        """Test save reports the configured result."""
        saved = {"id": 1}
        model = create_model_double({"save": {"result": saved}})

        model.save(capture)
        err, result = await capture.wait()

        assert err is None
        assert result is saved

    @pytest.mark.asyncio
    async def test_explicit_none_result(self, capture):
        """Test an explicit None result is reported instead of the model."""
        model = create_model_double({"save": {"result": None}})

        model.save(capture)

        assert await capture.wait() == (None, None)

    @pytest.mark.asyncio
    async def test_defaults_to_itself(self, capture):
        """Test save reports the model itself by default."""
        model = create_model_double({"props": {"id": 7}})

        model.save(capture)
        err, result = await capture.wait()

        assert err is None
        assert result is model

    @pytest.mark.asyncio
    async def test_reports_local_mutation(self, capture):
        """Test fields assigned before save are visible on the result."""
        model = create_model_double({"props": {"name": "Alice"}})

        model.name = "Alicia"
        model.save(capture)
        _, result = await capture.wait()

        assert result.name == "Alicia"

    @pytest.mark.asyncio
    async def test_callback_is_deferred(self, capture):
        """Test save never calls back synchronously."""
        model = create_model_double()

        model.save(capture)
        assert not capture.called

        await asyncio.sleep(0)
        assert capture.called

    def test_repeated_calls(self, manual_scheduler):
        """Test every save call reports the same outcome again."""
        model = create_model_double({"save": {"err": "boom"}})
        first = CallbackCapture()
        second = CallbackCapture()

        model.save(first)
        model.save(second)
        assert manual_scheduler.run_pending() == 2

        assert first.args == ("boom", None)
        assert second.args == ("boom", None)

    def test_without_callback(self, manual_scheduler):
        """Test save without a callback schedules nothing."""
        model = create_model_double()

        model.save()

        assert manual_scheduler.pending == 0
        model.save.assert_called_once_with()


class TestModelDoubleConfiguration:
    """Test option handling."""

    def test_options_dataclass(self, manual_scheduler, capture):
        """Test factory accepts a ModelDoubleOptions instance."""
        options = ModelDoubleOptions(props={"id": 1}, save=SaveOptions(result="ok"))
        model = create_model_double(options)

        model.save(capture)
        manual_scheduler.run_pending()

        assert model.id == 1
        assert capture.args == (None, "ok")

    def test_malformed_options_fall_back(self, manual_scheduler):
        """Test wrongly shaped sections use defaults."""
        model = create_model_double({"props": 5, "destroy": "x", "save": [1]})
        destroyed = CallbackCapture()
        saved = CallbackCapture()

        model.destroy(destroyed)
        model.save(saved)
        manual_scheduler.run_pending()

        assert model.fields() == {}
        assert destroyed.args == (None,)
        assert saved.args == (None, model)

    def test_non_mapping_options(self, manual_scheduler, capture):
        """Test non-mapping options behave like no options."""
        model = create_model_double("not options")

        model.save(capture)
        manual_scheduler.run_pending()

        assert capture.result is model

    def test_explicit_scheduler(self, capture):
        """Test operations use the scheduler passed to the factory."""
        scheduler = ManualScheduler()
        model = create_model_double(scheduler=scheduler)

        model.destroy(capture)

        assert scheduler.pending == 1
        scheduler.run_pending()
        assert capture.args == (None,)

    def test_sync_test_without_event_loop(self, capture):
        """Test callbacks wait for run_pending() outside an event loop."""
        model = create_model_double({"destroy": {"err": "boom"}})

        model.destroy(capture)
        assert not capture.called

        assert run_pending() == 1
        assert capture.args == ("boom",)


class TestModelDoubleSpies:
    """Test call recording on the operations."""

    def test_save_records_calls(self, manual_scheduler, capture):
        """Test save is a spy."""
        model = create_model_double()

        model.save(capture)

        model.save.assert_called_once_with(capture)
        assert model.destroy.call_count == 0

    def test_destroy_records_calls(self, manual_scheduler, capture):
        """Test destroy is a spy."""
        model = create_model_double()

        model.destroy(capture)
        model.destroy(capture)

        assert model.destroy.call_count == 2
