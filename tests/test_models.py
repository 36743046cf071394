"""Tests for data models."""

from datetime import datetime, timezone

from treino.models import (
    ExerciseLog,
    ExerciseSpec,
    Intensity,
    MediaAttachment,
    PostPage,
    Tag,
    WorkoutPost,
    WorkoutTemplate,
)


class TestIntensity:
    def test_values(self):
        assert [i.value for i in Intensity] == ["LOW", "MEDIUM", "HIGH"]

    def test_from_string(self):
        assert Intensity("HIGH") is Intensity.HIGH


class TestExercises:
    """Tests for ExerciseSpec and ExerciseLog."""

    def test_spec_defaults(self):
        exercise = ExerciseSpec(name="Squat")

        assert exercise.order_index == 0
        assert exercise.sets is None
        assert exercise.weight is None
        assert exercise.notes is None

    def test_log_adds_completed_sets(self):
        log = ExerciseLog(name="Squat", sets=5, completed_sets=4)
        data = log.to_dict()

        assert data["name"] == "Squat"
        assert data["sets"] == 5
        assert data["completed_sets"] == 4

    def test_spec_to_dict_has_no_completed_sets(self):
        assert "completed_sets" not in ExerciseSpec(name="Row").to_dict()


class TestWorkoutTemplate:
    def test_to_dict(self):
        template = WorkoutTemplate(
            id=3,
            user_id="uid-1",
            title="Legs",
            intensity=Intensity.LOW,
            exercises=[ExerciseSpec(name="Squat", order_index=0)],
            tags=[Tag(id=1, name="legs")],
            updated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        )
        data = template.to_dict()

        assert data["id"] == 3
        assert data["intensity"] == "LOW"
        assert data["exercises"][0]["name"] == "Squat"
        assert data["tags"] == [{"id": 1, "name": "legs"}]
        assert data["updated_at"].startswith("2024-05-01")
        assert data["created_at"] is None

    def test_tag_names(self):
        template = WorkoutTemplate(
            user_id="u",
            title="t",
            intensity=Intensity.MEDIUM,
            tags=[Tag(name="a"), Tag(name="b")],
        )
        assert template.tag_names == ["a", "b"]


class TestWorkoutPost:
    def test_to_dict(self):
        post = WorkoutPost(
            user_id="uid-1",
            title="Treino",
            date=datetime(2024, 5, 2, 7, 30, tzinfo=timezone.utc),
            intensity=Intensity.MEDIUM,
            media=[MediaAttachment(url="https://cdn/x.jpg", type="image", size_bytes=1024)],
        )
        data = post.to_dict()

        assert data["template_id"] is None
        assert data["date"] == "2024-05-02T07:30:00+00:00"
        assert data["media"][0]["size_bytes"] == 1024
        assert data["exercises"] == []


class TestPostPage:
    def test_total_pages(self):
        assert PostPage(items=[], total=0, page=1, page_size=10).total_pages == 0
        assert PostPage(items=[], total=10, page=1, page_size=10).total_pages == 1
        assert PostPage(items=[], total=11, page=1, page_size=5).total_pages == 3

    def test_to_dict(self):
        data = PostPage(items=[], total=7, page=2, page_size=5).to_dict()
        assert data == {"items": [], "total": 7, "page": 2, "page_size": 5}
