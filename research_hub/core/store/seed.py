from typing import List

from research_hub.core.models import Paper, Workspace


def default_papers() -> List[Paper]:
    """首次启动时的示例论文"""
    return [
        Paper(
            id="p1",
            title="Attention Is All You Need",
            authors=["Vaswani", "Shazeer", "Parmar"],
            year=2017,
            abstract="The dominant sequence transduction models are based on complex recurrent or convolutional neural networks...",
            added_at="2024-01-01T00:00:00+00:00",
            citations=125000,
            tags=["transformer", "nlp"],
        ),
        Paper(
            id="p2",
            title="ImageNet Classification with Deep CNNs",
            authors=["Krizhevsky", "Sutskever", "Hinton"],
            year=2012,
            abstract="We trained a large, deep convolutional neural network to classify the 1.2 million high-resolution images...",
            added_at="2024-01-05T00:00:00+00:00",
            citations=110000,
            tags=["cv", "cnn"],
        ),
    ]


def default_workspaces() -> List[Workspace]:
    """首次启动时的示例工作区"""
    return [
        Workspace(
            id="1",
            name="Neural Networks",
            description="Deep learning and architecture research",
            paper_ids=["p1", "p2"],
            created_at="2023-10-01",
            color="indigo",
        ),
    ]
