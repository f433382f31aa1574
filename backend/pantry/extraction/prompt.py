"""
Fixed instruction sent to the generative model for recipe extraction.
"""

_EXTRACTION_PROMPT = """あなたは料理レシピ抽出の専門家です。
以下のYouTube料理動画の情報から、レシピを抽出し、指定されたJSON形式で出力してください。

# 入力情報
- タイトル: {title}
- 説明文: {description}
- チャンネル名: {channel_title}

# 出力形式
必ず以下のJSON形式に従ってください。
説明文に記載がない項目は、キーはそのままに、値はnullまたは空配列にしてください。
JSON以外のテキスト（例：「はい、承知しました」などの前置き）は一切含めないでください。

{{
  "ingredients": ["材料1", "材料2", ...],
  "steps": ["手順1", "手順2", ...],
  "servings": "X人分",
  "cookingTime": "X分"
}}

# 指示
- 説明文から材料（分量含む）と手順を正確に抜き出してください。
- 材料が見つからない場合は "ingredients": [] としてください。
- 手順が見つからない場合は "steps": [] としてください。
- servings と cookingTime が見つからない場合は、そのキーの値に null を設定してください。
- 説明文に書かれていないことは絶対に推測しないでください。
- 必ず日本語で、指定されたJSON形式のみを出力してください。
"""


def build_extraction_prompt(title: str, description: str, channel_title: str = "") -> str:
    """Embed the three video fields verbatim into the extraction instruction."""
    return _EXTRACTION_PROMPT.format(
        title=title or "",
        description=description or "",
        channel_title=channel_title or "",
    )
