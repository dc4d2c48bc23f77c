"""제목 기반 기술 추출

공고 제목에 포함된 기술 키워드를 고정 어휘에서 찾는다.
대소문자를 구분하는 단순 부분 문자열 매칭이며, 누락(false negative)은 허용한다.
"""

from typing import FrozenSet, Iterable, Optional, Tuple

from saramin_crawler.config import settings


DEFAULT_SKILL_VOCABULARY: Tuple[str, ...] = (
    "JavaScript",
    "TypeScript",
    "Node.js",
    "Python",
    "Java",
    "Kotlin",
    "Spring",
    "React",
    "Angular",
    "Vue",
    "Django",
    "FastAPI",
    "AWS",
)


class SkillExtractor:
    """고정 어휘 기반 기술 추출기"""

    def __init__(self, vocabulary: Optional[Iterable[str]] = None):
        if vocabulary is None:
            vocabulary = settings.SKILL_VOCABULARY or DEFAULT_SKILL_VOCABULARY
        self.vocabulary: Tuple[str, ...] = tuple(v for v in vocabulary if v)

    def extract(self, title: Optional[str]) -> FrozenSet[str]:
        """
        제목에서 기술명 추출

        Examples:
            >>> SkillExtractor().extract("Backend Node.js Engineer")
            frozenset({'Node.js'})
        """
        if not title:
            return frozenset()
        return frozenset(skill for skill in self.vocabulary if skill in title)
