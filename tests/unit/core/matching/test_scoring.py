#!/usr/bin/env python3
"""
Unit tests for the four-component scoring function.
"""

import unittest
import uuid
from datetime import date

from core.matching.models import (
    CandidateProfile,
    EducationEntry,
    ExperienceInterval,
    RequirementCriteria,
    MAX_TOTAL_SCORE,
)
from core.matching.scoring import (
    education_satisfies,
    score_candidate,
    score_education,
    score_experience,
    score_overlap,
)

TODAY = date(2024, 6, 15)


def _criteria(**kwargs):
    return RequirementCriteria.build(requirement_id=uuid.uuid4(), **kwargs)


class TestEducationScore(unittest.TestCase):

    def test_bachelors_in_mechanical_engineering_matches_engineering(self):
        criteria = _criteria(
            required_education_levels=["bachelors"],
            required_fields_of_study=["Engineering"],
        )
        educations = [EducationEntry(level="bachelors", field_of_study="Mechanical Engineering")]
        self.assertEqual(score_education(criteria, educations), 25)

    def test_field_match_is_case_insensitive_and_bidirectional(self):
        criteria = _criteria(
            required_education_levels=["masters"],
            required_fields_of_study=["computer science and engineering"],
        )
        entry = EducationEntry(level="masters", field_of_study="COMPUTER SCIENCE")
        self.assertTrue(education_satisfies(entry, criteria))

    def test_wrong_level_scores_zero(self):
        criteria = _criteria(required_education_levels=["doctorate"])
        educations = [EducationEntry(level="bachelors", field_of_study="Physics")]
        self.assertEqual(score_education(criteria, educations), 0)

    def test_any_entry_may_satisfy(self):
        criteria = _criteria(
            required_education_levels=["masters"],
            required_fields_of_study=["Data"],
        )
        educations = [
            EducationEntry(level="bachelors", field_of_study="Data Science"),
            EducationEntry(level="masters", field_of_study="Big Data"),
        ]
        self.assertEqual(score_education(criteria, educations), 25)

    def test_level_without_fields_of_study(self):
        criteria = _criteria(required_education_levels=["mba"])
        self.assertEqual(score_education(criteria, [EducationEntry(level="mba")]), 25)

    def test_blank_field_of_study_is_no_constraint(self):
        criteria = _criteria(
            required_education_levels=["bachelors"],
            required_fields_of_study=["   "],
        )
        educations = [EducationEntry(level="bachelors", field_of_study="History")]
        self.assertEqual(score_education(criteria, educations), 25)

    def test_missing_field_of_study_fails_field_constraint(self):
        criteria = _criteria(
            required_education_levels=["bachelors"],
            required_fields_of_study=["Law"],
        )
        self.assertEqual(score_education(criteria, [EducationEntry(level="bachelors")]), 0)

    def test_empty_level_set_never_matches_by_default(self):
        criteria = _criteria(required_fields_of_study=["Engineering"])
        educations = [EducationEntry(level="doctorate", field_of_study="Engineering")]
        self.assertEqual(score_education(criteria, educations), 0)

    def test_empty_level_set_matches_any_when_enabled(self):
        criteria = _criteria(required_fields_of_study=["Engineering"])
        educations = [EducationEntry(level="doctorate", field_of_study="Engineering")]
        self.assertEqual(score_education(criteria, educations, empty_levels_match_any=True), 25)

    def test_no_education_entries(self):
        criteria = _criteria(required_education_levels=["bachelors"])
        self.assertEqual(score_education(criteria, []), 0)


class TestExperienceScore(unittest.TestCase):

    def test_four_of_five_years(self):
        self.assertEqual(score_experience(4, 5), 24)

    def test_meets_requirement(self):
        self.assertEqual(score_experience(5, 5), 30)
        self.assertEqual(score_experience(12, 5), 30)

    def test_zero_required_years_gives_full_points(self):
        self.assertEqual(score_experience(0, 0), 30)

    def test_negative_total_clamps_to_zero(self):
        self.assertEqual(score_experience(-2, 5), 0)

    def test_proportional_rounding(self):
        # 30 * 1/4 = 7.5 -> 8
        self.assertEqual(score_experience(1, 4), 8)


class TestOverlapScore(unittest.TestCase):

    def setUp(self):
        self.s1, self.s2, self.s3 = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    def test_two_of_three_skills(self):
        criteria = _criteria(required_skills=[self.s1, self.s2, self.s3])
        self.assertEqual(score_overlap([self.s1, self.s3], criteria.required_skills, 30), 20)

    def test_empty_requirement_awards_nothing(self):
        criteria = _criteria()
        self.assertEqual(score_overlap([self.s1], criteria.required_skills, 30), 0)

    def test_ids_compare_across_str_and_uuid(self):
        criteria = _criteria(required_skills=[str(self.s1).upper()])
        self.assertEqual(score_overlap([self.s1], criteria.required_skills, 30), 30)

    def test_duplicates_and_extra_ids_do_not_inflate(self):
        criteria = _criteria(required_certifications=[self.s1, self.s2])
        held = [self.s1, self.s1, self.s3, None]
        # 15 * 1/2 = 7.5 -> 8
        self.assertEqual(score_overlap(held, criteria.required_certifications, 15), 8)


class TestScoreCandidate(unittest.TestCase):
    """End-to-end scoring of one candidate."""

    def setUp(self):
        self.skills = [uuid.uuid4() for _ in range(3)]
        self.certs = [uuid.uuid4() for _ in range(2)]
        self.criteria = _criteria(
            required_experience_years=5,
            required_education_levels=["bachelors"],
            required_fields_of_study=["Engineering"],
            required_skills=self.skills,
            required_certifications=self.certs,
        )

    def test_full_breakdown(self):
        profile = CandidateProfile(
            user_id=uuid.uuid4(),
            educations=[EducationEntry("bachelors", "Mechanical Engineering")],
            experiences=[
                ExperienceInterval(date(2015, 1, 1), date(2017, 1, 1)),
                ExperienceInterval(date(2018, 1, 1), date(2019, 7, 1)),
            ],
            skill_ids=[self.skills[0], self.skills[2]],
            certification_ids=[self.certs[0]],
        )
        breakdown = score_candidate(self.criteria, profile, today=TODAY)

        self.assertEqual(breakdown.to_dict(), {
            'education_match': 25,
            'experience_years_match': 24,
            'skills_match': 20,
            'certifications_match': 8,
        })
        self.assertEqual(breakdown.total, 77)

    def test_perfect_candidate_scores_maximum(self):
        profile = CandidateProfile(
            user_id=uuid.uuid4(),
            educations=[EducationEntry("bachelors", "Engineering")],
            experiences=[ExperienceInterval(date(2010, 1, 1), None)],
            skill_ids=list(self.skills),
            certification_ids=list(self.certs),
        )
        self.assertEqual(score_candidate(self.criteria, profile, today=TODAY).total, MAX_TOTAL_SCORE)

    def test_empty_profile(self):
        profile = CandidateProfile(user_id=uuid.uuid4())
        self.assertEqual(score_candidate(self.criteria, profile, today=TODAY).total, 0)

    def test_total_always_within_bounds(self):
        profile = CandidateProfile(
            user_id=uuid.uuid4(),
            experiences=[ExperienceInterval(date(2024, 1, 1), date(2000, 1, 1))],
            skill_ids=[uuid.uuid4()],
        )
        total = score_candidate(self.criteria, profile, today=TODAY).total
        self.assertGreaterEqual(total, 0)
        self.assertLessEqual(total, MAX_TOTAL_SCORE)


if __name__ == "__main__":
    unittest.main()
