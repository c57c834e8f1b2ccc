"""
SocialFeed - 企业社交平台的信息流聚合与互动计数服务
"""

__version__ = "1.0.0"
