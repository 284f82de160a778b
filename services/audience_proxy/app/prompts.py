"""
Prompt templates and response schema for the audience generator.

The system instruction and schema are invariant across requests; only the
user query changes, with the caller's topic substituted into a fixed
sentence. The schema is a request to the model, not a guarantee: responses
are relayed as-is even when the audience count falls outside 8 to 10.
"""

from shared.models import (
    Content,
    GenerateContentPayload,
    GenerationConfig,
    Part,
)

# =============================  SYSTEM PROMPT  ============================= #

AUDIENCE_SYSTEM_PROMPT = (
    "你是一位市場調查員和廣告專業的廣告投售。"
    "你的任務是根據用戶提供的產品或課程主題，生成一個包含10個行為的列表，"
    "以及每個行為底下8到10個精準的感興趣受眾。"
    "最重要的一點是：**每個感興趣受眾的描述後方，請務必使用括號 `(...)` "
    "標示一個最相關的廣告平台可選取的受眾標籤（例如：興趣標籤或行為標籤），"
    "並緊接著使用方括號 `[...]` 標示該受眾規模的預估人數範圍。"
    "請以中文數字單位 (萬, 百萬) 呈現，例如：[人數範圍: 20萬 - 150萬]**。"
    "請以繁體中文回應，並嚴格遵循提供的JSON結構和數量要求。"
    "請確保受眾描述具體、專業且符合市場行銷的邏輯。"
)

# ==============================  USER QUERY  =============================== #

USER_QUERY_TEMPLATE = "請針對主題：「{topic}」，生成10個行為及每個行為下8-10個精準受眾。"

# ============================  RESPONSE SCHEMA  ============================ #

AUDIENCE_RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "behavior": {
                "type": "STRING",
                "description": "與產品主題相關的具體用戶行為",
            },
            "audiences": {
                "type": "ARRAY",
                "items": {
                    "type": "STRING",
                    "description": "對此行為感興趣的8-10個精準受眾輪廓，必須包含標籤和規模",
                },
            },
        },
        "required": ["behavior", "audiences"],
    },
}


def build_user_query(topic: str) -> str:
    return USER_QUERY_TEMPLATE.format(topic=topic)


def build_audience_payload(topic: str) -> GenerateContentPayload:
    """Combine system prompt, templated query and schema into one payload."""
    return GenerateContentPayload(
        contents=[Content(parts=[Part(text=build_user_query(topic))])],
        system_instruction=Content(parts=[Part(text=AUDIENCE_SYSTEM_PROMPT)]),
        generation_config=GenerationConfig(
            response_mime_type="application/json",
            response_schema=AUDIENCE_RESPONSE_SCHEMA,
        ),
    )
