"""
Page Replacement Visualizer — FIFO, LRU, Optimal & Clock

This application replays a page reference string against a fixed number of
physical frames and lets the user step through every reference:
    - Frame table contents after each reference
    - Page hits, page faults and evicted pages
    - Clock hand position and reference bits
    - Fault/hit statistics compared across all four policies

Built with Streamlit for the web interface and Plotly for visualizations.
Run with:  streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import time                                  # For pacing automatic playback
import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

from config import (
    DEFAULT_FRAME_COUNT,
    DEFAULT_PLAYBACK_SPEED,
    DEFAULT_REFERENCE_STRING,
    EVENT_LOG_LIMIT,
    MAX_FRAMES,
    MIN_FRAMES,
    PLAYBACK_SPEEDS,
)
from engine import (
    InvalidInput,
    ReplacementPolicy,
    event_log,
    simulate_all,
    statistics,
)
from playback import Playback
from utils import get_color, parse_reference_string


# =============================================================================
# RENDERING HELPERS
# =============================================================================

def frame_label(index, frame, step):
    """Bar label for one frame, with the metadata the policy relies on."""
    if frame.is_empty:
        return f"F{index}: Empty"

    label = f"F{index}: P{frame.page}"
    if step.policy == ReplacementPolicy.FIFO:
        label += f" (loaded @ {frame.loaded_at})"
    elif step.policy == ReplacementPolicy.LRU:
        label += f" (last used @ {frame.last_used})"
    elif step.policy == ReplacementPolicy.CLOCK:
        label += f" (bit={int(frame.reference_bit)})"
        if step.clock_hand == index:
            label += " ← hand"
    return label


def frames_figure(step):
    """Bar chart of the frame table in ``step``; the Clock hand gets an outline."""
    x, y, text, colors, outline = [], [], [], [], []
    for i, frame in enumerate(step.frames):
        x.append(i)
        y.append(1)
        text.append(frame_label(i, frame, step))
        colors.append(get_color(frame, step))
        outline.append(4 if step.clock_hand == i else 0)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x,
        y=y,
        text=text,
        marker_color=colors,
        marker_line_color="royalblue",
        marker_line_width=outline,
        hovertext=text,
        hoverinfo='text'
    ))
    fig.update_layout(
        height=180,
        showlegend=False,
        yaxis=dict(showticklabels=False),
        xaxis=dict(title="Frame", tickmode="linear")
    )
    return fig


def reference_markdown(references, position):
    """Reference string with done / current / pending references styled."""
    parts = []
    for i, ref in enumerate(references):
        if i == position:
            parts.append(f":blue[**[{ref}]**]")
        elif i < position:
            parts.append(f":gray[{ref}]")
        else:
            parts.append(str(ref))
    return " ".join(parts)


def history_rows(run, position):
    rows = []
    for step in run[:position + 1]:
        rows.append({
            "step": step.index + 1,
            "reference": step.reference,
            "result": "FAULT" if step.is_fault else "HIT",
            "evicted": "" if step.evicted_page is None else step.evicted_page,
            "frames": " | ".join("-" if f.is_empty else str(f.page) for f in step.frames),
        })
    return rows


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

st.set_page_config(page_title="Page Replacement Visualizer", layout="wide")

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Page Replacement Visualizer — FIFO, LRU, Optimal & Clock")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Operating System Concepts Used in This Project")
    st.markdown(
        """
        ## 📘 Key Concepts

        ### **1. Frames and Pages**
        - Physical memory is split into a fixed number of *frames*.
        - Each frame holds exactly one virtual *page*.

        ### **2. Reference String**
        - The ordered list of pages a program touches, e.g. `7,0,1,2,0,3`.

        ### **3. Page Hit / Page Fault**
        - **Hit**: the referenced page is already resident in a frame.
        - **Fault**: it is not; the OS must load it, evicting a page if every frame is full.

        ### **4. Page Replacement Algorithms**

        #### **FIFO (First In First Out)**
        - Replace the page that entered memory earliest.
        - Can suffer from *Belady's anomaly*: more frames, more faults.

        #### **LRU (Least Recently Used)**
        - Replace the page that hasn't been used for the longest time.

        #### **Optimal (Belady's algorithm)**
        - Replace the page whose next use lies farthest in the future.
        - Needs the whole future reference string, so it only serves as a lower bound.

        #### **Clock (Second Chance)**
        - Frames form a circle with a *hand* and a *reference bit* per frame.
        - A set bit buys the page a second chance: the hand clears it and moves on.
        - The first frame found with a clear bit is evicted.

        ---
        ### ✔ Use the Simulator view to step through each algorithm.
        """
    )
    st.stop()

# =============================================================================
# SIMULATOR PAGE - Main Interactive Interface
# =============================================================================

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

reference_input = st.sidebar.text_area(
    "Reference string (comma separated page numbers)",
    value=DEFAULT_REFERENCE_STRING
)

frame_count = st.sidebar.slider(
    "Number of frames",
    min_value=MIN_FRAMES,
    max_value=MAX_FRAMES,
    value=DEFAULT_FRAME_COUNT
)

policy = st.sidebar.selectbox(
    "Algorithm",
    options=list(ReplacementPolicy.ALL),
    format_func=lambda p: ReplacementPolicy.LABELS[p]
)

speed = st.sidebar.selectbox(
    "Playback speed (steps/sec)",
    options=list(PLAYBACK_SPEEDS),
    index=PLAYBACK_SPEEDS.index(DEFAULT_PLAYBACK_SPEED),
    format_func=lambda s: f"{s:g}x"
)

# -----------------------------------------------------------------------------
# SIMULATION - recomputed from the inputs on every rerun
# -----------------------------------------------------------------------------

try:
    references = parse_reference_string(reference_input)
    runs = simulate_all(references, frame_count)
except InvalidInput as e:
    st.sidebar.error(str(e))
    st.error("Fix the simulation settings to run the simulation.")
    st.stop()

if len(references) == 0:
    st.warning("No pages to run")
    st.stop()

run = runs[policy]

# -----------------------------------------------------------------------------
# SESSION STATE - Playback Persistence
# -----------------------------------------------------------------------------

if 'playback' not in st.session_state:
    st.session_state.playback = Playback(len(run), speed)

playback: Playback = st.session_state.playback
playback.set_speed(speed)

# A new run replaces the old one entirely; rewind so no position outlives it
run_key = (tuple(references), frame_count, policy)
if st.session_state.get('run_key') != run_key:
    st.session_state.run_key = run_key
    playback.load(len(run))
else:
    playback.clamp()

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Controls")

    # Callbacks run before the rerun, so labels and disabled states below are current
    b1, b2, b3, b4, b5 = st.columns(5)
    b1.button("⏮ Back", on_click=playback.step_backward, disabled=playback.at_start)
    b2.button("Pause" if playback.playing else "Play", on_click=playback.toggle_play)
    b3.button("Next ⏭", on_click=playback.step_forward, disabled=playback.at_end)
    b4.button("End", on_click=playback.skip_to_end, disabled=playback.at_end)
    b5.button("Reset", on_click=playback.reset)

    st.write(f"Step {playback.position + 1} of {playback.length}")

    st.subheader("Event Log")
    events = event_log(run, playback.position)
    if len(events) == 0:
        st.write("No events yet — press Play or Next")
    for ev in events[-EVENT_LOG_LIMIT:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    st.subheader("Reference String")
    st.markdown(reference_markdown(references, playback.position))

    st.subheader(f"Memory Frames — {ReplacementPolicy.LABELS[policy]}")
    if not playback.started:
        st.info("Click Play or Next to start the simulation")
    else:
        step = run[playback.position]
        if step.is_fault:
            status = f"Page {step.reference}: **:red[Page Fault]**"
            if step.evicted_page is not None:
                status += f" (Replaced: {step.evicted_page})"
        else:
            status = f"Page {step.reference}: **:green[Page Hit]**"
        st.markdown(status)
        st.plotly_chart(frames_figure(step), use_container_width=True)

        st.subheader("Step History")
        st.table(history_rows(run, playback.position))

    # ----- Statistics Display -----
    st.subheader("Statistics")
    stats = {p: statistics(r) for p, r in runs.items()}

    tabs = st.tabs(list(ReplacementPolicy.ALL))
    for tab, p in zip(tabs, ReplacementPolicy.ALL):
        with tab:
            m1, m2, m3 = st.columns(3)
            m1.metric("Page Faults", stats[p].fault_count)
            m2.metric("Page Hits", stats[p].hit_count)
            m3.metric("Hit Ratio", f"{stats[p].hit_ratio * 100:.2f}%")
            st.caption(ReplacementPolicy.DESCRIPTIONS[p])

    # ----- Hits vs Faults Comparison Chart -----
    fig2 = go.Figure()
    fig2.add_trace(go.Bar(
        name="Faults",
        x=list(ReplacementPolicy.ALL),
        y=[stats[p].fault_count for p in ReplacementPolicy.ALL]
    ))
    fig2.add_trace(go.Bar(
        name="Hits",
        x=list(ReplacementPolicy.ALL),
        y=[stats[p].hit_count for p in ReplacementPolicy.ALL]
    ))
    fig2.update_layout(height=300, title="Hits vs Faults", barmode="group")
    st.plotly_chart(fig2, use_container_width=True)

# =============================================================================
# FOOTER - Usage Tips and Examples
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Enter a comma separated reference string and press **Play** or **Next**.\n"
    "- Switch the algorithm to replay the same string under another policy.\n"
    "- Change the number of frames to see how fault counts react."
)

st.markdown("---")
st.markdown(
    "**Instructor examples**:\n"
    "1) Textbook string `7,0,1,2,0,3,0,4,2,3,0,3,2,1,2,0,1,7,0,1` with 3 frames: "
    "FIFO 15 faults, LRU 12, Optimal 9.\n"
    "2) Belady's anomaly: run `1,2,3,4,1,2,5,1,2,3,4,5` under FIFO with 3 and then 4 frames."
)

# -----------------------------------------------------------------------------
# AUTO-PLAY - advance one step per rerun while playing
# -----------------------------------------------------------------------------

if playback.playing:
    time.sleep(playback.delay)
    playback.tick()
    st.rerun()
