import pytest

from utils import content_ai


class FakeReply:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    """Returns canned replies in order and records the prompts."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def invoke(self, prompt):
        self.prompts.append(prompt)
        return FakeReply(self.replies.pop(0))


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(content_ai.ContentServiceUnavailable):
        content_ai.get_llm()


def test_extract_json_finds_object_in_prose():
    text = 'Sure! Here you go:\n```json\n{"a": 1, "b": [1, 2]}\n```'
    assert content_ai.extract_json(text, {}) == {"a": 1, "b": [1, 2]}


def test_extract_json_finds_array():
    assert content_ai.extract_json('list: [{"title": "x"}] done', []) == [{"title": "x"}]


@pytest.mark.parametrize("text", ["no json here", "{broken: json", '["array"]'])
def test_extract_json_falls_back(text):
    fallback = {"k": "v"}
    result = content_ai.extract_json(text, fallback)
    assert result == fallback
    assert result is not fallback


def test_generate_site_content():
    llm = FakeLLM('{"homeTitle": "Hi", "tagline": "T", "aboutUs": "About", "contactBlurb": "C"}')
    content = content_ai.generate_site_content("Frosty", "HVAC", llm=llm)
    assert content == {"homeTitle": "Hi", "tagline": "T", "aboutUs": "About", "contactBlurb": "C"}
    assert '"Frosty" in the HVAC industry' in llm.prompts[0]


def test_generate_site_content_fills_gaps_from_fallback():
    content = content_ai.generate_site_content("Frosty", llm=FakeLLM('{"tagline": "Cool"}'))
    assert content["tagline"] == "Cool"
    assert content["homeTitle"] == "Welcome to Frosty"


def test_generate_site_content_unparseable_reply():
    content = content_ai.generate_site_content("Frosty", llm=FakeLLM("I cannot help with that."))
    assert content == content_ai.fallback_site_content("Frosty")


def test_generate_services():
    llm = FakeLLM('[{"title": "Repair", "description": "Fix"}, {"description": "no title"}, "junk"]')
    assert content_ai.generate_services("Frosty", llm=llm) == [{"title": "Repair", "description": "Fix"}]


def test_generate_services_fallback():
    assert content_ai.generate_services("Frosty", llm=FakeLLM("nothing")) == content_ai.FALLBACK_SERVICES


def test_generate_seo_includes_colors_in_prompt():
    llm = FakeLLM('{"seoTitle": "Frosty AC", "seoDescription": "Desc", "seoKeywords": "ac"}')
    seo = content_ai.generate_seo("Frosty", "HVAC", ["#111111", "#222222"], llm=llm)
    assert seo == {"seoTitle": "Frosty AC", "seoDescription": "Desc", "seoKeywords": "ac"}
    assert "Brand Colors: #111111, #222222" in llm.prompts[0]


def test_generate_seo_defaults_title_to_company():
    seo = content_ai.generate_seo("Frosty", llm=FakeLLM("oops"))
    assert seo == {"seoTitle": "Frosty", "seoDescription": "", "seoKeywords": ""}


def test_analyze_logo_merges_two_replies():
    llm = FakeLLM(
        '{"companyName": "Frosty", "industry": "HVAC", "colors": {"primary": "#123456"}, '
        '"style": "flat", "symbols": "snowflake"}',
        '{"tagline": "Cool", "services": [{"title": "Repair", "description": "Fix"}]}',
    )
    result = content_ai.analyze_logo(b"\x89PNG", "image/png", industry="HVAC", llm=llm)

    assert result["companyName"] == "Frosty"
    assert result["tagline"] == "Cool"
    assert result["services"] == [{"title": "Repair", "description": "Fix"}]

    message = llm.prompts[0][0]
    image_block = message.content[1]
    assert image_block["image_url"].startswith("data:image/png;base64,")
    assert "HVAC company website" in llm.prompts[1]


def test_analyze_logo_falls_back_on_garbage():
    result = content_ai.analyze_logo(b"x", "image/png", llm=FakeLLM("??", "??"))
    assert result["colors"] == content_ai.FALLBACK_LOGO_ANALYSIS["colors"]
    assert result["tagline"] == content_ai.FALLBACK_TAGLINE_SERVICES["tagline"]


def test_list_content_blocks_are_joined():
    llm = FakeLLM([{"type": "text", "text": '{"seoTitle": '}, {"type": "text", "text": '"Joined"}'}])
    assert content_ai.generate_seo("Frosty", llm=llm)["seoTitle"] == "Joined"
