import os
import tempfile
from pathlib import Path

# Column name constants - centralized to avoid duplication
COL_PROVIDER = "Provider"
COL_MODEL = "Model"
COL_REGION = "Region"
COL_INPUT_RATE = "Input ($/1K tokens)"
COL_OUTPUT_RATE = "Output ($/1K tokens)"
COL_INPUT_COST = "Input Cost ($)"
COL_OUTPUT_COST = "Output Cost ($)"
COL_TOTAL_COST = "Total Cost ($)"
COL_DIFFERENCE = "Difference ($)"
COL_TIER = "Source"

BEDROCK_PRICING_PAGE = "https://aws.amazon.com/bedrock/pricing/"

# Region choices when adding a model
AWS_REGIONS = [
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "eu-west-1",
    "eu-west-2",
    "eu-central-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-northeast-1",
    "ap-south-1",
    "ca-central-1",
    "sa-east-1",
    "mumbai",
]

# Provider display name -> substrings of its Bedrock model identifiers
PROVIDER_KEYWORDS = {
    "Amazon": ["titan", "nova"],
    "Anthropic": ["claude"],
    "Google": ["gemma"],
    "Meta": ["llama"],
    "Mistral AI": ["mistral", "mixtral", "ministral", "magistral"],
    "OpenAI": ["gpt"],
    "Cohere": ["command"],
    "AI21 Labs": ["jamba"],
    "DeepSeek": ["deepseek"],
    "Moonshot AI": ["kimi"],
    "MiniMax AI": ["minimax"],
    "NVIDIA": ["nemotron"],
    "Qwen": ["qwen"],
    "Stability AI": ["sdxl", "stable"],
    "TwelveLabs": ["voxtral"],
    "Writer": ["palmyra"],
}

# Providers whose Bedrock prices are not published in the pricing feed
PROVIDERS_WITHOUT_API_PRICING = frozenset({
    "Anthropic",
    "Stability AI",
    "Writer",
    "Cohere",
    "AI21 Labs",
})


def get_pricing_notes():
    return (
        "**How costs are computed:**\n"
        "- Prices are **USD per 1K tokens**, as published for AWS Bedrock on-demand usage\n"
        "- Monthly cost = (price / 1000) × tokens per request × requests per month, for input and output separately\n"
        "- Default models are refreshed from the pricing catalog on load; your edits to them last for this session only\n"
        "\n"
        f"Note: batch, provisioned throughput and multimodal pricing are not included. See [AWS Bedrock Pricing]({BEDROCK_PRICING_PAGE}).\n"
    )


def format_usd(value: float, decimals: int = 4) -> str:
    return f"${value:,.{decimals}f}"


def format_difference(difference: float) -> str:
    """Render a price difference against the baseline ("Base" when equal)."""
    if difference == 0:
        return "Base"
    sign = "+" if difference > 0 else "-"
    return f"{sign}${abs(difference):,.4f}"


def atomic_write_text(path: Path, content: str) -> None:
    """
    Replace ``path`` with ``content`` in a single rename.

    Readers see either the old file or the new one, never a partial write.

    Args:
        path: Destination file
        content: Text to write (UTF-8)
    """
    path = Path(path)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
