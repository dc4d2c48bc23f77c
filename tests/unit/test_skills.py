"""제목 기반 기술 추출 테스트"""

from saramin_crawler.normalizers import SkillExtractor


class TestSkillExtractor:

    def test_node_backend_title(self):
        skills = SkillExtractor().extract("Backend Node.js Engineer")
        assert "Node.js" in skills
        assert "Python" not in skills

    def test_multiple_skills(self):
        skills = SkillExtractor().extract("Python/Django 백엔드 개발자")
        assert {"Python", "Django"} <= skills

    def test_case_sensitive(self):
        assert SkillExtractor().extract("python developer") == frozenset()

    def test_no_match_returns_empty(self):
        assert SkillExtractor().extract("영업 관리 담당자") == frozenset()

    def test_empty_title(self):
        assert SkillExtractor().extract("") == frozenset()
        assert SkillExtractor().extract(None) == frozenset()

    def test_substring_heuristic_accepts_false_positive(self):
        # "JavaScript" 안의 "Java"도 매칭된다
        assert {"JavaScript", "Java"} <= SkillExtractor().extract("JavaScript 프론트엔드")

    def test_custom_vocabulary(self):
        extractor = SkillExtractor(vocabulary=["Rust", "Go"])
        assert extractor.extract("Rust 시스템 엔지니어") == frozenset({"Rust"})
