"""Prompt templates for Gemini AI service."""

PRODUCT_COPY_PROMPT = """你是一個專業的電商商品文案撰寫專家。請根據這些商品圖片，生成一個吸引人的商品標題和詳細描述。

要求：
1. 標題：簡潔有力，30-50字，包含關鍵賣點
2. 描述：詳細完整，150-300字，包含：
   - 產品特色（至少3點）
   - 適用場景
   - 規格說明
   - 使用建議

"""

CATEGORY_LINE = "商品類別：{category}\n"

KEYWORDS_LINE = "關鍵字：{keywords}\n"

RESPONSE_FORMAT = """
請以 JSON 格式回覆，結構如下：
{
  "title": "商品標題",
  "description": "商品描述",
  "tags": ["標籤1", "標籤2", "標籤3"]
}
"""
