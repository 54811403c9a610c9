import random
from datetime import datetime, timedelta, timezone
import logging

from sqlmodel import select

from models import Category, Member, Post, Topic
from core.unit_of_work import UnitOfWorkManager
from dependencies import engine
from repositories import TopicRepository
from services.slugs import create_url_friendly, generate_slug
from services.topic_tag import TopicTagService

logger = logging.getLogger(__name__)

# Data pools
USERNAMES = [
    "juan", "maria", "alberto", "lucia", "pedro", "ana", "carlos", "sofia",
    "john", "emma", "michael", "sarah", "david", "isabella", "james", "laura"
]

CATEGORIES = [
    ("General Discussion", "Anything that does not fit elsewhere"),
    ("Help & Support", "Ask questions and get answers"),
    ("Announcements", "News about the forum"),
    ("Show and Tell", "Share what you have built"),
]

TAGS = [
    "python", "fastapi", "docker", "vue", "typescript", "sql",
    "testing", "deployment", "performance", "beginner"
]

TOPIC_NAMES = [
    "Just finished my first project with Vue.js",
    "Anyone else loving the new TypeScript features?",
    "Finally solved that bug that was driving me crazy",
    "Learning FastAPI has been an amazing journey",
    "Just deployed my first full-stack application",
    "Does anyone have good resources for learning Docker?",
    "How do I speed up this SQL query?",
    "Best way to structure tests for an API?",
    "Welcome to the new forum",
    "Forum rules, please read before posting",
]

REPLIES = [
    "Thanks, this helped a lot!",
    "Have you tried restarting the container?",
    "I had the same problem last week",
    "Check the docs, there is a section on exactly this",
    "Marking this as solved, thanks everyone",
    "Could you share the full traceback?",
]

manager = UnitOfWorkManager(engine)


def create_test_data(topic_count: int = 40):
    with manager.new_unit_of_work() as unit_of_work:
        session = unit_of_work.session
        if session.exec(select(Topic)).first():
            logger.info("Test data already present, skipping")
            return

        members = [
            Member(username=name, email=f"{name}@example.com") for name in USERNAMES
        ]
        categories = [
            Category(
                name=name,
                slug=create_url_friendly(name),
                description=description,
                sort_order=index,
            )
            for index, (name, description) in enumerate(CATEGORIES)
        ]
        session.add_all(members + categories)

        topics = TopicRepository(session)
        topic_tags = TopicTagService(session)
        slugs = []
        now = datetime.now(timezone.utc)

        for _ in range(topic_count):
            name = random.choice(TOPIC_NAMES)
            author = random.choice(members)
            created = now - timedelta(hours=random.randint(1, 24 * 60))

            topic = Topic(
                name=name,
                slug=generate_slug(name, slugs),
                create_date=created,
                views=random.randint(0, 500),
                is_sticky=random.random() < 0.1,
                category_id=random.choice(categories).id,
                member_id=author.id,
            )
            slugs.append(topic.slug)
            topic.tags = topic_tags.get_or_create(random.sample(TAGS, random.randint(0, 3)))
            topics.add(topic)

            topic.posts.append(Post(
                post_content=f"{name}. What do you all think?",
                date_created=created,
                is_topic_starter=True,
                topic_id=topic.id,
                member_id=author.id,
            ))
            for index in range(random.randint(0, 5)):
                replied = created + timedelta(minutes=10 * (index + 1))
                topic.posts.append(Post(
                    post_content=random.choice(REPLIES),
                    date_created=replied,
                    topic_id=topic.id,
                    member_id=random.choice(members).id,
                ))

            if len(topic.posts) > 1 and random.random() < 0.3:
                topic.posts[-1].is_solution = True
                topic.solved = True

        unit_of_work.commit()
        logger.info(f"Created {topic_count} topics for {len(members)} members")


if __name__ == "__main__":
    create_test_data()
