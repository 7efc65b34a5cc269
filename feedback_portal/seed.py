"""Load the demo portal data set into a store.

Usage:
    python -m feedback_portal.seed
"""
import random
import sys
from datetime import timedelta

from feedback_portal.database import Store
from feedback_portal.models.course import Course
from feedback_portal.models.feedback import MAX_RATING, MIN_RATING, Feedback
from feedback_portal.models.user import Role, User

ADMIN_EMAIL = 'admin@example.com'
STUDENT_EMAIL = 'student@example.com'
EXTRA_STUDENT_COUNT = 20
FEEDBACK_PER_STUDENT = 5

DEMO_COURSES = [
    ('Introduction to React', 'react', 'https://www.youtube.com/watch?v=bMknfKXIFA8'),
    ('Advanced TypeScript', 'typescript', 'https://www.youtube.com/watch?v=gp5H0Lw_g_4'),
    ('UI/UX Design Principles', 'uiux', 'https://www.youtube.com/watch?v=cKsu3K8aC2g'),
    ('Backend with Node.js', 'nodejs', 'https://www.youtube.com/watch?v=f2EqECiTBL8'),
    ('Database Management (SQL)', 'database', 'https://www.youtube.com/watch?v=HXV3zeQKqGY'),
    ('Python for Beginners', 'python', 'https://www.youtube.com/watch?v=rfscVS0vtbw'),
    ('Machine Learning Fundamentals', 'ml', 'https://www.youtube.com/watch?v=i_LwzRVP7bg'),
    ('DevOps Crash Course', 'devops', 'https://www.youtube.com/watch?v=JothAEQoIIo'),
    ('Introduction to Docker', 'docker', 'https://www.youtube.com/watch?v=p28piYY_j7Y'),
    ('Cybersecurity Basics', 'cyber', 'https://www.youtube.com/watch?v=inWWhr5tnEA'),
]


def build_demo_users(store: Store) -> list[User]:
    now = store.now()
    users = [
        User(
            id='user-1',
            name='Admin User',
            email=ADMIN_EMAIL,
            password='Admin@1234!',
            role=Role.ADMIN,
            created_at=now,
            profile_picture='https://picsum.photos/seed/admin/200',
        ),
        User(
            id='user-2',
            name='Student User',
            email=STUDENT_EMAIL,
            password='Student@1234!',
            role=Role.STUDENT,
            created_at=now,
            phone_number='123-456-7890',
            date_of_birth='2000-01-01',
            address='123 University Ave',
            profile_picture='https://picsum.photos/seed/student/200',
        ),
    ]

    for number in range(3, EXTRA_STUDENT_COUNT + 3):
        users.append(
            User(
                id=f'user-{number}',
                name=f'Test Student {number - 2}',
                email=f'student{number - 2}@example.com',
                password='Password@123!',
                role=Role.STUDENT,
                # every fourth demo student starts out blocked
                is_blocked=number % 4 == 0,
                created_at=now - timedelta(days=number),
            )
        )

    return users


def build_demo_courses(store: Store) -> list[Course]:
    now = store.now()
    return [
        Course(
            id=f'course-{index}',
            name=name,
            description=f'A comprehensive course on {name}.',
            link=link,
            thumbnail=f'https://picsum.photos/seed/{thumbnail_seed}/400/200',
            created_at=now,
        )
        for index, (name, thumbnail_seed, link) in enumerate(DEMO_COURSES, start=1)
    ]


def build_demo_feedback(store: Store, users: list[User], courses: list[Course], rng: random.Random) -> list[Feedback]:
    now = store.now()
    feedback: list[Feedback] = []
    students = [user for user in users if user.role == Role.STUDENT]

    for student_index, student in enumerate(students):
        for week in range(1, FEEDBACK_PER_STUDENT + 1):
            course = rng.choice(courses)
            rating = rng.randint(MIN_RATING, MAX_RATING)
            quality = 'great' if rating > 3 else 'decent'
            feedback.append(
                Feedback(
                    id=f'feedback-{student_index * FEEDBACK_PER_STUDENT + week}',
                    student_id=student.id,
                    student_name=student.name,
                    course_id=course.id,
                    rating=rating,
                    message=f'This was a {quality} course. The content on {course.name} was very insightful.',
                    created_at=now - timedelta(weeks=week),
                )
            )

    return feedback


def seed_demo_data(store: Store, random_seed: int | None = None) -> None:
    rng = random.Random(random_seed)
    users = build_demo_users(store)
    courses = build_demo_courses(store)
    feedback = build_demo_feedback(store, users, courses, rng)
    store.load(users=users, courses=courses, feedback=feedback)


def main() -> None:
    from feedback_portal.main import configure_logging, create_store

    configure_logging()
    store = create_store(seed=True)
    print(
        f'Seeded {len(store.users)} users, {len(store.courses)} courses '
        f'and {len(store.feedback)} feedback records.',
        file=sys.stdout,
    )
    store.close()


if __name__ == '__main__':
    main()
