# SPDX-FileCopyrightText: 2025 GFZ Helmholtz Centre for Geosciences
# SPDX-FileContributor: Bernhard Haas
#
# SPDX-License-Identifier: Apache-2.0

# ruff: noqa: E402, T201

import logging
import sys
from datetime import datetime, timedelta, timezone

import numpy as np

logging.getLogger().addHandler(logging.StreamHandler(sys.stdout))
logging.getLogger().setLevel(logging.INFO)

import irbem_bridge as ib

# the shared object is taken from IRBEM_LIB_PATH if set
time = datetime(2015, 2, 2, 6, 12, 43, tzinfo=timezone.utc)
maginput = {"Kp": 40}

# functional interface
lstar = ib.make_lstar(time, [600, 60, 50], "GDZ", maginput, kext="T89")
print(f"L* = {lstar.lstar:.3f}, Lm = {lstar.lm:.3f}, MLT = {lstar.mlt:.2f} h")

# object interface, the model is fixed on the instance
model = ib.MagFields(kext="T89", sysaxes="GDZ")
X = {"dateTime": time, "x1": 600, "x2": 60, "x3": 50}

field = model.get_field_multi(X, maginput)
print(f"|B| = {field.bmag:.1f} nT")

foot = model.find_foot_point(X, stop_alt=100, hemi_flag=0, maginput=maginput)
print(f"Foot point (GDZ): {foot.xfoot}")

shell = model.drift_shell(X, maginput)
print(f"Drift shell traced along {np.count_nonzero(shell.nposit)} field lines")

# batches: one time per position
times = [time + timedelta(minutes=10 * i) for i in range(3)]
positions = np.array([[600.0, 700.0, 800.0], [60.0, 60.0, 60.0], [50.0, 50.0, 50.0]])
print(model.make_lstar({"dateTime": times, "x1": positions[0], "x2": positions[1], "x3": positions[2]}, maginput).lstar)

# typed coordinates
x_geo = ib.GEO(2.0, 0.0, 0.0)
x_gsm = ib.GSM(time, x_geo)
print(f"{x_geo} -> {x_gsm}")
print(ib.transform([time], positions, "gdz2geo"))

print(f"IGRF version {ib.get_igrf_version()}, IRBEM release {ib.irbem_fortran_release()}")
