"""Tests for the scaling engine."""

import math

import pytest

from marks_scaler.models import Exam, MarkRecord, Student
from marks_scaler.scaling import (
    ConfigurationError,
    NonFiniteMarkError,
    UnknownScalingMethodError,
    apply_scaling,
)


def scaled_by_id(students, exam_id="E1"):
    return {s.id: s.scaled_mark(exam_id) for s in students}


def cohort(*marks):
    return [
        Student(id=f"S{i}", name=f"Student {i}", marks={"E1": MarkRecord(raw=m)})
        for i, m in enumerate(marks, start=1)
    ]


class TestBellCurve:
    """Tests for bell curve scaling."""

    def test_scaled_follows_z_score(self, students, exam):
        """Scaled mark is centre plus z times a sixth of the scaling value."""
        result = scaled_by_id(apply_scaling(students, exam, "bellCurve"))
        sigma = math.sqrt(800 / 3)
        assert result["S1"] == pytest.approx(25.0)
        assert result["S3"] == pytest.approx(25 + (20 / sigma) * 50 / 6)
        assert result["S2"] == pytest.approx(25 - (20 / sigma) * 50 / 6)

    def test_equal_marks_all_centre(self, exam):
        """Zero standard deviation puts everyone at half the scaling value."""
        result = scaled_by_id(apply_scaling(cohort(70, 70, 70), exam, "bellCurve"))
        assert set(result.values()) == {25.0}

    @pytest.mark.parametrize("mark", [0.1, 0.7, 33.3])
    def test_equal_fractional_marks_all_centre(self, exam, mark):
        """Identical fractional marks count as zero spread."""
        result = scaled_by_id(apply_scaling(cohort(mark, mark, mark), exam, "bellCurve"))
        assert set(result.values()) == {25.0}

    def test_huge_marks_do_not_overflow(self, exam):
        """Finite marks of large magnitude still give finite scaled marks."""
        result = scaled_by_id(apply_scaling(cohort(1e200, -1e200), exam, "bellCurve"))
        assert result["S1"] == pytest.approx(25 + 50 / 6)
        assert result["S2"] == pytest.approx(25 - 50 / 6)

    def test_single_student_at_centre(self, exam):
        """A lone student has zero spread."""
        result = scaled_by_id(apply_scaling(cohort(42), exam, "bellCurve"))
        assert result["S1"] == 25.0

    def test_outliers_not_clamped(self, exam):
        """Extreme marks may land outside [0, scaling_value]."""
        marks = [50] * 99 + [100]
        result = apply_scaling(cohort(*marks), exam, "bellCurve")
        assert max(s.scaled_mark("E1") for s in result) > exam.scaling_value


class TestLinearNormalization:
    """Tests for linear normalization."""

    def test_example_scenario(self, students, exam):
        """80, 60, 100 out of 100 scale to 40, 30, 50 out of 50."""
        result = scaled_by_id(apply_scaling(students, exam, "linearNormalization"))
        assert result == pytest.approx({"S1": 40, "S2": 30, "S3": 50})

    def test_inverse_recovers_raw(self, exam):
        """Dividing by scaling_value / total_marks gives back the raw mark."""
        marks = [12.5, 33.3, 67.25, 99.9]
        result = apply_scaling(cohort(*marks), exam, "linearNormalization")
        factor = exam.scaling_value / exam.total_marks
        recovered = [s.scaled_mark("E1") / factor for s in result]
        assert recovered == pytest.approx(marks)

    def test_zero_total_marks_raises(self, students):
        """Zero total marks is a configuration error."""
        exam = Exam(id="E1", name="Broken", total_marks=0, scaling_value=50)
        with pytest.raises(ConfigurationError):
            apply_scaling(students, exam, "linearNormalization")

    def test_overflowing_result_raises(self):
        """A scaled mark that overflows to infinity is rejected."""
        exam = Exam(id="E1", name="Tiny", total_marks=1e-300, scaling_value=50)
        with pytest.raises(NonFiniteMarkError):
            apply_scaling(cohort(1e300), exam, "linearNormalization")

    def test_zero_total_marks_leaves_input_untouched(self, students):
        """A failed call makes no partial update."""
        exam = Exam(id="E1", name="Broken", total_marks=0, scaling_value=50)
        with pytest.raises(ConfigurationError):
            apply_scaling(students, exam, "linearNormalization")
        assert all(s.scaled_mark("E1") is None for s in students)


class TestMinMaxNormalization:
    """Tests for min-max normalization."""

    def test_example_scenario(self, students, exam):
        """60 maps to 0, 100 to 50 and 80 halfway."""
        result = scaled_by_id(apply_scaling(students, exam, "minMaxNormalization"))
        assert result == {"S1": 25, "S2": 0, "S3": 50}

    def test_extreme_range_does_not_overflow(self, exam):
        """A max - min wider than the float range still maps to [0, scaling_value]."""
        result = scaled_by_id(apply_scaling(cohort(1.7e308, -1.7e308, 0), exam, "minMaxNormalization"))
        assert result == pytest.approx({"S1": 50, "S2": 0, "S3": 25})

    def test_equal_marks_get_full_credit(self, exam):
        """Identical marks all receive the scaling value."""
        result = scaled_by_id(apply_scaling(cohort(55, 55), exam, "minMaxNormalization"))
        assert set(result.values()) == {50}


class TestPercentile:
    """Tests for percentile scaling."""

    def test_example_scenario(self, students, exam):
        """Top rank gets 50, middle 25, bottom 0."""
        result = scaled_by_id(apply_scaling(students, exam, "percentile"))
        assert result == {"S1": 25, "S2": 0, "S3": 50}

    def test_single_student_gets_full_value(self, exam):
        """n = 1 gives the scaling value."""
        result = scaled_by_id(apply_scaling(cohort(10), exam, "percentile"))
        assert result["S1"] == 50

    def test_ties_share_first_rank(self, exam):
        """Tied marks share the rank of the first of them in descending order."""
        # Descending: 90, 90, 80, 70 -> ranks 0, 0, 2, 3
        result = scaled_by_id(apply_scaling(cohort(90, 80, 90, 70), exam, "percentile"))
        assert result["S1"] == 50
        assert result["S3"] == 50
        assert result["S2"] == pytest.approx(50 / 3)
        assert result["S4"] == 0

    def test_independent_of_roster_order(self, exam):
        """Reordering the roster gives the same per-student results."""
        forward = scaled_by_id(apply_scaling(cohort(30, 60, 90), exam, "percentile"))
        backward = scaled_by_id(
            apply_scaling(list(reversed(cohort(30, 60, 90))), exam, "percentile")
        )
        assert forward == backward


class TestApplyScaling:
    """Tests for cohort selection and copy-on-write behaviour."""

    @pytest.mark.parametrize(
        "method",
        ["bellCurve", "linearNormalization", "minMaxNormalization", "percentile"],
    )
    def test_other_exams_untouched(self, roster, exam, method):
        """Scaling E1 never alters E2 records."""
        result = apply_scaling(roster.students, exam, method)
        for before, after in zip(roster.students, result):
            assert before.marks.get("E2") == after.marks.get("E2")

    def test_students_without_mark_returned_unchanged(self, roster, exam):
        """Students outside the cohort are the same objects."""
        result = apply_scaling(roster.students, exam, "percentile")
        assert result[3] is roster.students[3]
        assert "E1" not in result[3].marks

    def test_input_not_mutated(self, students, exam):
        """Input students keep their original records."""
        apply_scaling(students, exam, "minMaxNormalization")
        assert all(s.scaled_mark("E1") is None for s in students)

    def test_order_preserved(self, roster, exam):
        """Output keeps roster order."""
        result = apply_scaling(roster.students, exam, "bellCurve")
        assert [s.id for s in result] == ["S1", "S2", "S3", "S4"]

    def test_rounded_mark_carried_over(self, exam):
        """Rescaling keeps any existing rounded value."""
        student = Student(
            id="S1", name="A", marks={"E1": MarkRecord(raw=80, scaled=40.0, rounded=40)}
        )
        result = apply_scaling([student], exam, "percentile")
        assert result[0].scaled_mark("E1") == 50
        assert result[0].rounded_mark("E1") == 40

    def test_no_eligible_students_is_noop(self, exam):
        """A cohort with no raw marks returns the roster unchanged."""
        students = [Student(id="S1", name="A")]
        result = apply_scaling(students, exam, "bellCurve")
        assert result == students
        assert result[0] is students[0]

    def test_deterministic(self, students, exam):
        """Same input gives same output."""
        first = apply_scaling(students, exam, "bellCurve")
        second = apply_scaling(students, exam, "bellCurve")
        assert first == second

    def test_unknown_method_raises(self, students, exam):
        """Unsupported method tags are rejected."""
        with pytest.raises(UnknownScalingMethodError):
            apply_scaling(students, exam, "zScoreish")

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_raw_mark_raises(self, exam, bad):
        """NaN or infinite raw marks fail fast."""
        with pytest.raises(NonFiniteMarkError) as exc_info:
            apply_scaling(cohort(50, bad), exam, "bellCurve")
        assert exc_info.value.student_id == "S2"

    def test_non_positive_scaling_value_raises(self, students):
        """A scaling value must be a positive target ceiling."""
        exam = Exam(id="E1", name="Broken", total_marks=100, scaling_value=0)
        with pytest.raises(ConfigurationError):
            apply_scaling(students, exam, "percentile")
