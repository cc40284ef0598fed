#!/usr/bin/env python3
"""Seed a development database with demo users, topics, memberships and posts.

Usage:
    python scripts/seed_dev_data.py

Requires FORUM_DATABASE_URL (or defaults to localhost). Runs through the
service layer, so every row obeys the same rules as live traffic.
"""

import asyncio

from forum_server.core.config import get_settings
from forum_server.core.database import create_engine, init_db
from forum_server.services import join_requests, posts, topics, users
from forum_server.store import TopicStore, UserStore
from forum_shared.schemas.common import Visibility
from forum_shared.schemas.posts import PostCreateRequest
from forum_shared.schemas.topics import TopicCreateRequest
from forum_shared.schemas.users import UserCreateRequest

USERS = [
    ("alice", "Alice", "Adminson"),
    ("bobbuilder", "Bob", "Builder"),
    ("charliedev", "Charlie", "Codes"),
    ("davedesign", "Dave", "Draws"),
    ("eveeverywhere", "Eve", "Everywhere"),
]

# (name, visibility, founder)
TOPICS = [
    ("General Chat", Visibility.PUBLIC, "alice"),
    ("React Developers", Visibility.PUBLIC, "charliedev"),
    ("SQL Help", Visibility.PUBLIC, "alice"),
    ("Random Memes", Visibility.PUBLIC, "eveeverywhere"),
    ("Admin Staff", Visibility.PRIVATE, "alice"),
    ("Project Alpha", Visibility.PRIVATE, "alice"),
    ("Secret Surprise", Visibility.PRIVATE, "davedesign"),
    ("Investors Board", Visibility.PRIVATE, "bobbuilder"),
]

MEMBERS = {
    "General Chat": ["bobbuilder", "charliedev", "davedesign", "eveeverywhere"],
    "React Developers": ["bobbuilder", "davedesign", "alice"],
    "Project Alpha": ["bobbuilder", "davedesign"],
}

# Left pending so the admin panel has something to show
PENDING = {"Admin Staff": ["eveeverywhere"], "Project Alpha": ["charliedev"]}

# (topic, author, title, content), oldest first
POSTS = [
    ("General Chat", "eveeverywhere", "Hello World!", "Just joined the forum. What is this place about?"),
    ("General Chat", "alice", "Welcome!", "Welcome Eve! This is a place to discuss tech, life, and everything in between."),
    ("General Chat", "eveeverywhere", "Nice to meet you", "Thanks Alice. I am really into databases."),
    ("General Chat", "charliedev", "Databases", "You should check out the SQL Help topic then."),
    ("React Developers", "bobbuilder", "useEffect loop", "I keep getting an infinite loop in my useEffect. Can anyone help?"),
    ("React Developers", "charliedev", "Found the issue", "You update the state inside the effect and list it as a dependency."),
    ("React Developers", "davedesign", "Another solution", "Use a functional update: setState(s => s + 1) and drop state from the array."),
    ("React Developers", "bobbuilder", "Thanks!", "That worked perfectly, thanks Charlie and Dave!"),
    ("Project Alpha", "alice", "Weekly Sync", "What is the status on the backend API?"),
    ("Project Alpha", "bobbuilder", "Backend Update", "The API is 90% done. Just need to finish the middleware."),
    ("Project Alpha", "davedesign", "Frontend Update", "Dashboard UI is finished. Waiting on the API."),
]


async def seed():
    settings = get_settings()
    engine = create_engine(settings)
    await init_db(engine)
    topic_store = TopicStore(engine)
    user_store = UserStore(engine)

    if await user_store.username_exists(USERS[0][0]):
        print("Database already seeded, nothing to do.")
        await engine.dispose()
        return

    user_ids = {}
    for username, first_name, last_name in USERS:
        req = UserCreateRequest(username=username, first_name=first_name, last_name=last_name)
        user_ids[username] = await users.create_user(req, user_store)

    topic_ids = {}
    founders = {}
    for name, visibility, founder in TOPICS:
        req = TopicCreateRequest(name=name, visibility=visibility)
        topic_ids[name] = await topics.create_topic(req, user_ids[founder], topic_store)
        founders[name] = user_ids[founder]

    visibility_of = {name: visibility for name, visibility, _ in TOPICS}
    for name, usernames in MEMBERS.items():
        topic_id = topic_ids[name]
        for username in usernames:
            if visibility_of[name] == Visibility.PUBLIC:
                await topics.join_topic(topic_id, user_ids[username], topic_store)
            else:
                request_id = await join_requests.request_join(topic_id, user_ids[username], topic_store)
                await join_requests.approve_request(request_id, topic_id, founders[name], topic_store)

    for name, usernames in PENDING.items():
        for username in usernames:
            await join_requests.request_join(topic_ids[name], user_ids[username], topic_store)

    for topic_name, author, title, content in POSTS:
        req = PostCreateRequest(title=title, content=content)
        await posts.create_post(topic_ids[topic_name], user_ids[author], req, topic_store)

    await engine.dispose()
    print(
        f"Seeded {len(USERS)} users, {len(TOPICS)} topics, "
        f"{sum(len(v) for v in PENDING.values())} pending requests, {len(POSTS)} posts."
    )


if __name__ == "__main__":
    asyncio.run(seed())
