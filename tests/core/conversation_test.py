from research_hub.core.conversation import (
    ConversationLog,
    build_brainy_context,
    build_brainy_prompt,
    build_workspace_context,
    build_workspace_prompt,
    format_history,
)
from research_hub.core.models import ChatRole, Paper


def _paper(title: str, abstract: str) -> Paper:
    return Paper(id=title, title=title, authors=[], year=None, abstract=abstract, added_at="")


def test_log_ids_are_unique_and_ordered():
    """测试同一条记录中的消息ID唯一且递增"""
    log = ConversationLog("test")
    messages = [log.append(ChatRole.USER, str(i)) for i in range(50)]
    ids = [int(m.id) for m in messages]
    assert len(set(ids)) == 50
    assert ids == sorted(ids)
    assert all(m.timestamp for m in messages)


def test_log_history_is_a_copy():
    """测试 history 返回副本"""
    log = ConversationLog("test")
    log.append(ChatRole.USER, "hi")
    history = log.history()
    log.append(ChatRole.ASSISTANT, "hello")
    assert len(history) == 1
    assert len(log) == 2

    log.typing = True
    log.clear()
    assert len(log) == 0
    assert log.typing is False


def test_format_history():
    """测试历史消息的渲染"""
    log = ConversationLog("test")
    log.append(ChatRole.USER, "What is attention?")
    log.append(ChatRole.ASSISTANT, "A weighting mechanism.")
    assert format_history(log.history()) == "User: What is attention?\nAssistant: A weighting mechanism."
    assert format_history([]) == ""


def test_brainy_context_uses_titles_only():
    """测试 Brainy 的上下文只包含标题"""
    papers = [_paper("Alpha", "secret abstract"), _paper("Beta", "other")]
    context = build_brainy_context(papers)
    assert "- Alpha\n- Beta" in context
    assert "secret abstract" not in context
    assert build_brainy_context([]) == "The user has no papers in their workspace yet."


def test_workspace_context_uses_abstracts():
    """测试工作区助手的上下文包含完整摘要"""
    papers = [_paper("Alpha", "first abstract"), _paper("Beta", "second abstract")]
    assert build_workspace_context(papers) == "[Alpha]\nfirst abstract\n\n[Beta]\nsecond abstract"


def test_prompts_include_history_and_query():
    """测试 prompt 包含历史和本轮问题"""
    log = ConversationLog("test")
    log.append(ChatRole.USER, "earlier question")
    log.append(ChatRole.ASSISTANT, "earlier answer")

    brainy = build_brainy_prompt("new question", [], log.history())
    assert brainy.startswith("Your name is Brainy.")
    assert "User: earlier question\nAssistant: earlier answer" in brainy
    assert "USER: new question" in brainy

    workspace = build_workspace_prompt("new question", [_paper("Alpha", "abs")], log.history())
    assert "[Alpha]\nabs" in workspace
    assert workspace.endswith("QUERY: new question")
