"""ResearchHub - AI研究工作区的会话状态与任务编排"""

__version__ = "1.0.0"
