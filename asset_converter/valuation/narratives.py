"""Canned outlook copy per asset group and horizon."""
from typing import Dict, List, TypedDict


class Narrative(TypedDict):
    summary: str
    bullets: List[str]
    confidence: str


# group -> mode -> narrative
NARRATIVES: Dict[str, Dict[str, Narrative]] = {
    "BTC": {
        "short": {
            "summary": "Bitcoin shows strong momentum with increasing institutional adoption and ETF inflows.",
            "bullets": [
                "ETF demand continues to support price stability and growth.",
                "Halving cycle effects expected to impact supply dynamics.",
                "Short-term volatility may persist due to macroeconomic factors.",
                "Regulatory clarity improving in major markets.",
            ],
            "confidence": "medium",
        },
        "long": {
            "summary": "Bitcoin's long-term outlook remains positive with growing mainstream acceptance.",
            "bullets": [
                "Store of value narrative gaining traction among institutions.",
                "Limited supply and increasing adoption support long-term appreciation.",
                "Technological improvements enhance scalability and utility.",
                "Potential for significant price appreciation over 5-year horizon.",
            ],
            "confidence": "high",
        },
    },
    "ETH": {
        "short": {
            "summary": "Ethereum benefits from network upgrades and DeFi ecosystem growth.",
            "bullets": [
                "Layer 2 solutions improving transaction efficiency.",
                "Staking rewards attracting long-term holders.",
                "DeFi and NFT markets driving utility demand.",
                "Upcoming upgrades may impact short-term volatility.",
            ],
            "confidence": "medium",
        },
        "long": {
            "summary": "Ethereum's transition to proof-of-stake positions it well for long-term growth.",
            "bullets": [
                "Sustainable tokenomics with deflationary mechanism.",
                "Dominant platform for smart contracts and dApps.",
                "Growing enterprise adoption and institutional interest.",
                "Strong developer community and continuous innovation.",
            ],
            "confidence": "high",
        },
    },
    "fiat": {
        "short": {
            "summary": "Currency markets influenced by central bank policies and economic indicators.",
            "bullets": [
                "Interest rate decisions impact currency strength.",
                "Inflation data drives monetary policy expectations.",
                "Geopolitical events create short-term volatility.",
                "Trade balance and economic growth affect valuation.",
            ],
            "confidence": "low",
        },
        "long": {
            "summary": "Long-term currency trends depend on economic fundamentals and policy stability.",
            "bullets": [
                "Economic growth rates determine currency appreciation potential.",
                "Central bank credibility and policy consistency matter.",
                "Demographic trends and productivity affect long-term value.",
                "Currency diversification remains important for portfolios.",
            ],
            "confidence": "medium",
        },
    },
    "GOLD": {
        "short": {
            "summary": "Gold prices respond to inflation expectations and dollar strength.",
            "bullets": [
                "Central bank buying supports demand.",
                "Inflation hedge characteristics attract investors.",
                "Dollar strength inversely correlates with gold prices.",
                "Geopolitical tensions increase safe-haven demand.",
            ],
            "confidence": "medium",
        },
        "long": {
            "summary": "Gold maintains its role as a long-term store of value and portfolio diversifier.",
            "bullets": [
                "Historical preservation of purchasing power over decades.",
                "Limited supply and mining constraints support prices.",
                "Central bank reserves continue to accumulate gold.",
                "Inflation protection remains relevant long-term.",
            ],
            "confidence": "high",
        },
    },
    "SILVER": {
        "short": {
            "summary": "Silver prices influenced by industrial demand and gold correlation.",
            "bullets": [
                "Industrial applications drive significant demand.",
                "Solar panel and electronics manufacturing support prices.",
                "Higher volatility than gold due to smaller market.",
                "Investment demand complements industrial usage.",
            ],
            "confidence": "medium",
        },
        "long": {
            "summary": "Silver benefits from both investment and industrial demand over long term.",
            "bullets": [
                "Green energy transition increases industrial demand.",
                "Affordable alternative to gold for investors.",
                "Supply constraints in mining sector.",
                "Dual role as precious and industrial metal.",
            ],
            "confidence": "medium",
        },
    },
    "equity_US": {
        "short": {
            "summary": "Tech stocks face market volatility but maintain strong fundamentals.",
            "bullets": [
                "Earnings growth and innovation drive performance.",
                "Market sentiment and interest rates impact valuations.",
                "Regulatory environment affects sector outlook.",
                "Product cycles and competitive dynamics matter.",
            ],
            "confidence": "medium",
        },
        "long": {
            "summary": "Leading tech companies positioned for long-term growth with strong moats.",
            "bullets": [
                "Market leadership and competitive advantages.",
                "Continuous innovation and R&D investments.",
                "Global expansion and market penetration.",
                "Dividend growth and shareholder returns.",
            ],
            "confidence": "high",
        },
    },
    "equity_IN": {
        "short": {
            "summary": "Indian stocks reflect economic growth and sector-specific trends.",
            "bullets": [
                "Domestic consumption and infrastructure spending support growth.",
                "IT sector benefits from digital transformation.",
                "Regulatory reforms and policy stability matter.",
                "Currency fluctuations impact export-oriented companies.",
            ],
            "confidence": "medium",
        },
        "long": {
            "summary": "Indian equities offer long-term growth potential with demographic advantages.",
            "bullets": [
                "Young population and rising middle class drive consumption.",
                "Infrastructure development creates investment opportunities.",
                "Technology and services sectors show strong fundamentals.",
                "Economic reforms support sustainable growth.",
            ],
            "confidence": "high",
        },
    },
}

DEFAULT_NARRATIVE: Narrative = {
    "summary": "Asset performance depends on market conditions and fundamental factors.",
    "bullets": [
        "Market trends and economic indicators influence prices.",
        "Supply and demand dynamics determine valuation.",
        "External factors create short-term volatility.",
        "Long-term outlook based on fundamental analysis.",
    ],
    "confidence": "low",
}


def narrative_for(group: str, mode: str) -> Narrative:
    """Copy for `group`; unknown groups (vehicles, unregistered ids) get the generic text."""
    by_mode = NARRATIVES.get(group)
    if by_mode is None:
        return DEFAULT_NARRATIVE
    return by_mode.get(mode, by_mode["short"])
