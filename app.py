"""
Memory & Disk Algorithm Visualizer — Best Fit, Second Chance & Disk Scheduling

This application provides an interactive simulation and visualization of
three classic Operating System resource management algorithms:
    - Best Fit memory allocation over fixed memory blocks
    - Second Chance page replacement
    - Disk head scheduling (SSTF, LOOK, CLOOK)

Built with Streamlit for the web interface and Plotly for visualizations.
The algorithms themselves live in engine.py, paging.py and disk.py; this
module only collects input and renders their results.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import time                                  # For pacing the auto-play

import plotly.graph_objects as go            # Interactive plotting library
import streamlit as st                       # Web application framework

import config
from disk import DiskPolicy, compare_policies, schedule
from engine import BestFitAllocator
from errors import SimulationError
from paging import SecondChanceSimulator, SimulationState
from utils import get_color, parse_int_sequence, parse_positive

config.setup_logging()

# Configure the Streamlit page
st.set_page_config(page_title="Memory & Disk Algorithm Visualizer", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

page = st.sidebar.radio(
    "Choose View",
    ["Home", "Best Fit", "Second Chance", "Disk Scheduling", "Concepts"],
)

st.title("Memory & Disk Algorithm Visualizer")


# =============================================================================
# HOME PAGE
# =============================================================================

def render_home():
    st.markdown(
        "Understand how memory allocation and disk scheduling work with "
        "interactive visualizations of popular algorithms."
    )
    col1, col2, col3 = st.columns(3)
    with col1:
        st.subheader("Best Fit Algorithm")
        st.write(
            "Allocates the smallest free partition that is big enough to "
            "accommodate the process, minimizing wasted memory space."
        )
    with col2:
        st.subheader("Second Chance Algorithm")
        st.write(
            "A page replacement algorithm that gives a second chance to pages "
            "before replacing them, improving on FIFO."
        )
    with col3:
        st.subheader("Disk Scheduling")
        st.write(
            "Visualize disk head movement with SSTF, LOOK, and CLOOK algorithms "
            "to optimize disk access patterns."
        )
    st.info("Pick a view from the sidebar to start.")


# =============================================================================
# BEST FIT PAGE
# =============================================================================

def render_best_fit():
    st.header("Best Fit Memory Allocation")

    # One allocator per browser session
    if "allocator" not in st.session_state:
        st.session_state.allocator = BestFitAllocator(strict=config.STRICT_FREE)
    allocator: BestFitAllocator = st.session_state.allocator

    st.sidebar.header("Memory Blocks")
    block_size = st.sidebar.number_input(
        "Block size", min_value=1, max_value=config.MAX_BLOCK_SIZE, value=100, step=10
    )
    if st.sidebar.button("Add Block"):
        try:
            block = allocator.add_block(parse_positive(block_size, "block size"))
            st.sidebar.success(f"Added block {block.block_id}")
        except SimulationError as e:
            st.sidebar.error(str(e))

    if st.sidebar.button(f"Load preset {config.DEFAULT_BLOCK_SIZES}"):
        allocator.load_preset(config.DEFAULT_BLOCK_SIZES)

    if st.sidebar.button("Reset"):
        allocator.reset()
        st.sidebar.success("Allocator reset")

    st.sidebar.markdown("---")
    st.sidebar.header("Processes")
    process_size = st.sidebar.number_input(
        "Process size", min_value=1, max_value=config.MAX_BLOCK_SIZE, value=50, step=10
    )
    if st.sidebar.button("Allocate Process"):
        try:
            result = allocator.allocate(parse_positive(process_size, "process size"))
            st.sidebar.success(
                f"P{result.allocation.alloc_id} -> Block {result.block_id}"
            )
        except SimulationError as e:
            st.sidebar.error(str(e))

    col1, col2 = st.columns([1, 2])

    # ----- Process table with free buttons -----
    with col1:
        st.subheader("Processes")
        allocations = allocator.get_allocations()
        if not allocations:
            st.write("No processes allocated yet")
        for a in allocations:
            c1, c2 = st.columns([3, 1])
            status = f"Block {a.block_id}" if a.allocated else "freed"
            c1.write(f"P{a.alloc_id} — size {a.size} — {status}")
            if a.allocated and c2.button("Free", key=f"free-{a.alloc_id}"):
                allocator.free(a.alloc_id)
                st.rerun()

        st.subheader("Event Log")
        for ev in allocator.event_log[-20:][::-1]:
            st.write(ev)

    # ----- Block occupancy -----
    with col2:
        st.subheader("Memory Blocks")
        blocks = allocator.get_state()
        if not blocks:
            st.write("No memory blocks — add one or load the preset")
            return

        st.table([
            {
                "block": f"B{b.block_id}",
                "size": b.capacity,
                "processes": "-".join(str(a.size) for a in b.occupants) or "—",
                "remaining": b.free_remaining,
            }
            for b in blocks
        ])

        # Stacked horizontal bars: one segment per occupant, then free space
        fig = go.Figure()
        labels = [f"B{b.block_id}" for b in blocks]
        depth = max((len(b.occupants) for b in blocks), default=0)
        for i in range(depth):
            sizes, colors, text = [], [], []
            for b in blocks:
                if i < len(b.occupants):
                    a = b.occupants[i]
                    sizes.append(a.size)
                    colors.append(get_color(a.alloc_id))
                    text.append(f"P{a.alloc_id} ({a.size})")
                else:
                    sizes.append(0)
                    colors.append(get_color(None))
                    text.append("")
            fig.add_trace(go.Bar(
                y=labels, x=sizes, orientation="h", marker_color=colors,
                text=text, hovertext=text, hoverinfo="text",
            ))
        fig.add_trace(go.Bar(
            y=labels,
            x=[b.free_remaining for b in blocks],
            orientation="h",
            marker_color=get_color(None),
            text=[f"free {b.free_remaining}" for b in blocks],
            hoverinfo="text",
        ))
        fig.update_layout(
            barmode="stack", showlegend=False, height=80 + 50 * len(blocks),
            yaxis=dict(autorange="reversed"),
        )
        st.plotly_chart(fig, use_container_width=True)

        st.subheader("Statistics")
        metrics = allocator.get_metrics()
        m1, m2, m3 = st.columns(3)
        m1.metric("Total Free", metrics["free"])
        m2.metric("Largest Free", metrics["largest_free"])
        m3.metric("Utilization", metrics["utilization"])


# =============================================================================
# SECOND CHANCE PAGE
# =============================================================================

def render_second_chance():
    st.header("Second Chance Page Replacement")

    st.sidebar.header("Algorithm Configuration")
    frame_count = st.sidebar.number_input(
        "Number of Page Frames", min_value=1, max_value=config.MAX_FRAME_COUNT,
        value=config.DEFAULT_FRAME_COUNT,
    )
    sequence_text = st.sidebar.text_area(
        "Page reference sequence (comma separated)", value=config.DEFAULT_PAGE_SEQUENCE
    )
    show_bits = st.sidebar.checkbox("Show reference bits", value=True)
    autoplay_speed = st.sidebar.select_slider(
        "Auto-play step (ms)", options=config.AUTOPLAY_SPEEDS_MS, value=1000
    )

    try:
        references = parse_int_sequence(sequence_text, "page sequence")
    except SimulationError as e:
        st.error(str(e))
        return

    # Rebuild the simulator when configuration changes
    sim = st.session_state.get("pager")
    if (sim is None or sim.frame_count != frame_count
            or sim.references != references):
        try:
            sim = SecondChanceSimulator(int(frame_count))
            sim.load(references)
        except SimulationError as e:
            st.error(str(e))
            return
        st.session_state.pager = sim

    c1, c2, c3, c4 = st.columns(4)
    if c1.button("Step Forward"):
        sim.step_next()
    if c2.button("Run All"):
        sim.run_all()
    if c3.button("Reset"):
        sim.load(references)
    autoplay = c4.toggle("Auto-play", value=False)

    if not references:
        st.warning("Please enter a valid page sequence")
        return

    # ----- Trace table: one column per step, one row per frame -----
    st.subheader("Frame Table")
    rows = []
    for f in range(sim.frame_count):
        row = {"frame": f"F{f}"}
        for entry in sim.trace:
            state = entry.frames[f]
            if state.page_id is None:
                cell = "—"
            elif show_bits:
                cell = f"{state.page_id} ({int(state.reference_bit)})"
            else:
                cell = str(state.page_id)
            row[f"{entry.step_index + 1}:{entry.page_id}"] = cell
        rows.append(row)
    outcome_row = {"frame": "hit/fault"}
    for entry in sim.trace:
        outcome_row[f"{entry.step_index + 1}:{entry.page_id}"] = "F" if entry.is_fault else "H"
    rows.append(outcome_row)
    st.dataframe(rows, use_container_width=True, hide_index=True)

    # ----- Statistics -----
    stats = sim.get_stats()
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Step", f"{len(sim.trace)}/{len(references)}")
    m2.metric("Page Faults", stats["faults"])
    m3.metric("Hit Ratio", stats["hit_ratio"])
    m4.metric("Pointer", f"F{sim.pointer}")

    fig = go.Figure()
    fig.add_trace(go.Bar(x=["Hits", "Faults"], y=[stats["hits"], stats["faults"]]))
    fig.update_layout(height=300, title="Hits vs Faults")
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Event Log")
    for ev in sim.event_log[-20:][::-1]:
        st.write(ev)

    if sim.state == SimulationState.COMPLETE:
        st.success("Simulation complete")
    elif autoplay:
        time.sleep(autoplay_speed / 1000.0)
        sim.step_next()
        st.rerun()


# =============================================================================
# DISK SCHEDULING PAGE
# =============================================================================

def render_disk_scheduling():
    st.header("Disk Scheduling Algorithms")

    st.sidebar.header("Disk Configuration")
    disk_size = st.sidebar.number_input(
        "Disk size (cylinders)", min_value=1, max_value=config.MAX_DISK_SIZE,
        value=config.DEFAULT_DISK_SIZE,
    )
    head = st.sidebar.number_input(
        "Initial head position", min_value=0, value=config.DEFAULT_HEAD_POSITION
    )
    request_text = st.sidebar.text_area(
        "Request sequence (comma separated)", value=config.DEFAULT_REQUEST_SEQUENCE
    )
    policy = st.sidebar.selectbox("Algorithm", options=list(DiskPolicy.ALL), index=2)

    try:
        requests = parse_int_sequence(request_text, "request sequence")
        if not requests:
            st.warning("Please enter a valid request sequence")
            return
        result = schedule(policy, int(head), int(disk_size), requests)
        comparison = compare_policies(int(head), int(disk_size), requests)
    except SimulationError as e:
        st.error(str(e))
        return

    col1, col2 = st.columns([2, 1])

    # ----- Head movement chart -----
    with col1:
        st.subheader(f"{policy} Head Movement")
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=result.visit_order,
            y=[m.visit_order for m in result.movements],
            mode="lines+markers+text",
            text=[str(p) for p in result.visit_order],
            textposition="middle right",
        ))
        fig.update_layout(
            height=120 + 40 * len(result.movements),
            xaxis=dict(range=[0, int(disk_size) - 1], side="top", title="Cylinder"),
            yaxis=dict(autorange="reversed", title="Step"),
            showlegend=False,
        )
        st.plotly_chart(fig, use_container_width=True)

    # ----- Visit order and totals -----
    with col2:
        st.metric("Total Head Movement", result.total_movement)
        st.metric("Average Seek", round(result.average_seek, 2))
        distances = [0] + result.seek_distances()
        st.table([
            {"order": m.visit_order, "position": m.position, "seek": d}
            for m, d in zip(result.movements, distances)
        ])

    # ----- Policy comparison -----
    st.subheader("Policy Comparison")
    fig2 = go.Figure()
    fig2.add_trace(go.Bar(
        x=list(comparison.keys()),
        y=[r.total_movement for r in comparison.values()],
    ))
    fig2.update_layout(height=300, title="Total Head Movement by Policy")
    st.plotly_chart(fig2, use_container_width=True)
    st.caption(
        "CLOOK counts the jump from the highest request back to the lowest one "
        "in its total movement."
    )


# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

def render_concepts():
    st.header("Operating System Concepts Used in This Project")
    st.markdown(
        """
        ### **1. Best Fit Allocation**
        - Memory is a set of fixed blocks, each with its own remaining space.
        - A process goes into the block whose remaining space is the *smallest* that still fits it.
        - Ties go to the lowest-numbered block.
        - Freeing a process gives its size back to the block.

        ### **2. Second Chance Page Replacement**
        - Each frame has a **reference bit**, set whenever its page is hit.
        - New pages are loaded with the bit cleared.
        - On a fault with no empty frame, a circular pointer sweeps the frames:
            - bit set → clear it and move on (the page gets a second chance),
            - bit clear → evict that page and load the new one there.
        - The sweep ends within two passes because every set bit it meets is cleared.

        ### **3. Disk Scheduling**
        - **SSTF**: always service the nearest pending request (may starve far requests).
        - **LOOK**: sweep up to the highest request, then reverse down to the lowest.
        - **CLOOK**: sweep up to the highest request, then jump back to the lowest and sweep up again.
        - Total head movement is the sum of the distances between consecutive positions.
        """
    )


# =============================================================================
# ROUTING
# =============================================================================

if page == "Home":
    render_home()
elif page == "Best Fit":
    render_best_fit()
elif page == "Second Chance":
    render_second_chance()
elif page == "Disk Scheduling":
    render_disk_scheduling()
else:
    render_concepts()
