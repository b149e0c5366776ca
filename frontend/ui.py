"""
Streamlit frontend for Course Search.

Each rerun feeds the current input through a SearchSession backed by
SearchClient (GET /api/search) and renders the ranked courses as cards
with a one-line summary of the results.

    streamlit run frontend/ui.py
"""

import asyncio
import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path when launched via `streamlit run`
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.client import SearchClient
from frontend.session import SearchSession, search_once
from frontend.stats import summary_line


async def _search(query: str) -> SearchSession:
    async with SearchClient() as client:
        return await search_once(query, client.search)


st.set_page_config(page_title="Course Search", layout="centered")
st.title("Course Search")

query = st.text_input(
    "Search courses",
    placeholder="Search for courses...",
    label_visibility="collapsed",
)

with st.spinner("Searching…"):
    session = asyncio.run(_search(query))

if session.error:
    st.error(session.error)

if session.stats.total:
    st.info(summary_line(session.stats))

for course in session.results:
    with st.container(border=True):
        st.subheader(course.get("title", ""))
        st.write(course.get("description", ""))
        left, middle, right = st.columns(3)
        left.caption(course.get("category", ""))
        middle.caption(f"Instructor: {course.get('instructor', '')}")
        right.markdown(f"**${course.get('price', 0)}**")

if session.placeholder:
    st.caption(session.placeholder)
