"""Tests for the editing session."""

import pytest
from promptforge.core.exceptions import (
    OptimizationError,
    PromptForgeError,
    TemplateError,
    TemplateNotFoundError,
)
from promptforge.core.types import MessageRole, ModelTier, Variable
from promptforge.session import EditingSession

from conftest import MockLLMProvider, FailingLLMProvider


class TestEditing:
    """Tests for text, selection, and values."""

    def test_set_text_extracts(self, session, greeting_template):
        slots = session.set_text(greeting_template)
        assert slots == [Variable("name", ""), Variable("due", "")]

    def test_set_text_non_string(self, session):
        """Test non-text input clears the editor."""
        assert session.set_text(None) == []
        assert session.text == ""

    def test_select_template(self, session):
        template = session.select_template("t7")
        assert session.selected_template_id == "t7"
        assert session.text == template.content
        assert [s.name for s in session.slots] == ["broken_code", "error_message"]
        assert session.active_template.id == "t7"

    def test_select_unknown(self, session):
        with pytest.raises(TemplateNotFoundError):
            session.select_template("t99")
        assert session.selected_template_id is None

    def test_value_follows_across_templates(self, session):
        """Test a value typed in one template fills the next that uses it."""
        session.set_text("Write a {{tone}} poem")
        session.set_value("tone", "playful")
        session.select_template("t3")
        values = {s.name: s.value for s in session.slots}
        assert values["tone"] == "playful"
        assert values["story_premise"] == ""

    def test_value_kept_through_edits(self, session):
        session.set_text("Summarize {{topic}}")
        session.set_value("topic", "tides")
        session.set_text("Summarize {{topic}} briefly for {{audience}}")
        assert session.interpolated_prompt() == "Summarize tides briefly for "

    def test_interpolated_prompt(self, session, greeting_template):
        session.set_text(greeting_template)
        session.set_values({"name": "Ada", "due": "Friday"})
        assert session.interpolated_prompt() == "Hi Ada, your Ada is due Friday"
        assert session.unfilled_variables() == []

    def test_unfilled_variables(self, session, greeting_template):
        session.set_text(greeting_template)
        session.set_value("name", "Ada")
        assert session.unfilled_variables() == ["due"]

    def test_clear_values(self, session, cache):
        """Test clearing blanks slots and forgets their cached values."""
        session.set_text("{{a}} {{b}}")
        session.set_values({"a": "1", "b": "2"})
        session.clear_values()
        assert [s.value for s in session.slots] == ["", ""]
        assert "a" not in cache and "b" not in cache

    def test_new_prompt(self, session):
        session.select_template("t4")
        session.new_prompt()
        assert session.text == ""
        assert session.selected_template_id is None
        assert session.slots == []
        assert session.messages == []

    def test_new_prompt_keeps_cache(self, session):
        session.set_text("{{topic}}")
        session.set_value("topic", "tides")
        session.new_prompt()
        session.select_template("t4")
        assert session.slots == [Variable("topic", "tides")]

    def test_default_tier_from_settings(self, env, memory_library, mock_llm_provider):
        env(PF_DEFAULT_TIER="pro")
        session = EditingSession(memory_library, provider=mock_llm_provider)
        assert session.model_tier == ModelTier.PRO

    def test_explicit_tier_beats_setting(self, env, memory_library):
        env(PF_DEFAULT_TIER="pro")
        assert EditingSession(memory_library, model_tier="flash").model_tier == ModelTier.FLASH

    def test_model_tier(self, session):
        session.set_model_tier("thinking_pro")
        assert session.model_tier == ModelTier.THINKING_PRO
        with pytest.raises(ValueError):
            session.set_model_tier("ultra")


class TestLibraryActions:
    """Tests for save and delete through the session."""

    def test_save_new_selects_it(self, session):
        session.set_text("Hello {{name}}")
        template = session.save("Greeting")
        assert template.is_custom
        assert session.selected_template_id == template.id

    def test_save_updates_selected_custom(self, session):
        session.set_text("v1 {{x}}")
        first = session.save("Draft")
        session.set_text("v2 {{x}}")
        second = session.save("Draft", category="Coding")
        assert second.id == first.id
        assert session.library.get(first.id).content == "v2 {{x}}"

    def test_save_from_builtin_creates_copy(self, session):
        session.select_template("t1")
        copy = session.save("My CoT")
        assert copy.id != "t1"
        assert session.selected_template_id == copy.id

    def test_save_blank(self, session):
        with pytest.raises(TemplateError):
            session.save("Empty")

    def test_delete_selected_resets(self, session):
        session.set_text("Bye {{name}}")
        template = session.save("Farewell")
        session.delete(template.id)
        assert session.text == ""
        assert session.selected_template_id is None

    def test_delete_other_keeps_editor(self, session):
        other = session.library.save("x", "Other")
        session.select_template("t4")
        session.delete(other.id)
        assert session.selected_template_id == "t4"


class TestRun:
    """Tests for running prompts and chatting."""

    @pytest.mark.asyncio
    async def test_run(self, session, mock_llm_provider, greeting_template):
        """Test run sends the interpolated prompt with the tier's model."""
        session.set_text(greeting_template)
        session.set_values({"name": "Ada", "due": "today"})
        session.set_model_tier("pro")

        reply = await session.run()

        assert reply.role == MessageRole.MODEL
        assert [m.role for m in session.messages] == [MessageRole.USER, MessageRole.MODEL]
        assert session.messages[0].text == "Hi Ada, your Ada is due today"
        call = mock_llm_provider.calls[0]
        assert call["messages"] == [{"role": "user", "content": "Hi Ada, your Ada is due today"}]
        assert call["model"] == "gemini-3-pro-preview"
        assert call["thinking_budget"] is None

    @pytest.mark.asyncio
    async def test_run_blank(self, session, mock_llm_provider):
        assert await session.run() is None
        assert mock_llm_provider.calls == []

    @pytest.mark.asyncio
    async def test_run_resets_transcript(self, session):
        session.set_text("First {{x}}")
        await session.run()
        await session.send("More please")
        await session.run()
        assert len(session.messages) == 2

    @pytest.mark.asyncio
    async def test_run_without_provider(self, memory_library):
        session = EditingSession(memory_library)
        session.set_text("Hi")
        with pytest.raises(PromptForgeError):
            await session.run()

    @pytest.mark.asyncio
    async def test_run_failure_records_error(self, memory_library, cache):
        """Test a provider failure becomes an error message, state untouched."""
        session = EditingSession(memory_library, provider=FailingLLMProvider(), cache=cache)
        session.set_text("Explain {{topic}}")
        session.set_value("topic", "tides")

        reply = await session.run()

        assert reply.role == MessageRole.ERROR
        assert reply.text == EditingSession.RUN_ERROR_TEXT
        assert session.slots == [Variable("topic", "tides")]
        assert cache.get("topic") == "tides"

    @pytest.mark.asyncio
    async def test_send_continues_conversation(self, memory_library):
        provider = MockLLMProvider(responses={"shorter": "Short answer."})
        session = EditingSession(memory_library, provider=provider)
        session.set_text("Explain tides")
        await session.run()

        reply = await session.send("Make it shorter")

        assert reply.text == "Short answer."
        history = provider.calls[-1]["messages"]
        assert [m["role"] for m in history] == ["user", "assistant", "user"]

    @pytest.mark.asyncio
    async def test_send_before_run(self, session, mock_llm_provider):
        assert await session.send("hello") is None
        assert mock_llm_provider.calls == []

    @pytest.mark.asyncio
    async def test_send_blank(self, session):
        session.set_text("Hi")
        await session.run()
        assert await session.send("   ") is None

    @pytest.mark.asyncio
    async def test_error_messages_not_resent(self, memory_library):
        """Test error entries stay out of the history sent to the model."""
        provider = FailingLLMProvider()
        session = EditingSession(memory_library, provider=provider)
        session.set_text("Hi")
        await session.run()

        reply = await session.send("Again")

        assert reply.text == EditingSession.SEND_ERROR_TEXT
        roles = [m["role"] for m in provider.calls[-1]["messages"]]
        assert roles == ["user", "user"]


class TestOptimize:
    """Tests for optimizing through the session."""

    @pytest.mark.asyncio
    async def test_optimize_replaces_text(self, memory_library):
        provider = MockLLMProvider(default="Explain {{topic}} clearly to {{audience}}.")
        session = EditingSession(memory_library, provider=provider)
        session.set_text("Explain {{topic}}")
        session.set_value("topic", "tides")

        result = await session.optimize()

        assert result.changed
        assert session.text == "Explain {{topic}} clearly to {{audience}}."
        assert session.slots == [Variable("topic", "tides"), Variable("audience", "")]

    @pytest.mark.asyncio
    async def test_optimize_failure_keeps_text(self, memory_library):
        session = EditingSession(memory_library, provider=FailingLLMProvider())
        session.set_text("Explain {{topic}}")
        with pytest.raises(OptimizationError):
            await session.optimize()
        assert session.text == "Explain {{topic}}"

    @pytest.mark.asyncio
    async def test_optimize_blank(self, session):
        assert await session.optimize() is None
