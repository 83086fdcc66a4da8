import numpy as np
import pytest

from pmsmpower.system import *
from pmsmpower.power import motor_losses, motor_power
from pmsmpower.library.generic import define_direct_drive


def test_torque_envelope():
	params = define_direct_drive()
	speed = np.linspace(0, 1000, 11)
	envelope = torque_envelope(400, speed, params)
	assert envelope['upper_limit'].shape == (11,)
	for i, s in enumerate(speed):
		limits = torque_limits(400, s, params)
		assert envelope['upper_limit'][i] == limits.upper_limit
		assert envelope['lower_limit'][i] == limits.lower_limit
		assert envelope['upper_power_limited'][i] == (limits.upper_constraint is Constraint.POWER)
	# standstill is current limited, top speed voltage limited
	assert not envelope['upper_power_limited'][0]
	assert envelope['upper_power_limited'][-1]


def test_power_map():
	params = define_direct_drive()
	torque = np.linspace(-200, 200, 9)
	speed = np.linspace(0, 800, 5)
	graphs = power_map(400, torque, speed, params)
	assert graphs['power'].shape == (9, 5)
	for i, t in enumerate(torque):
		for j, s in enumerate(speed):
			losses = motor_losses(400, t, s, params)
			for k in LOSS_TERMS:
				assert graphs[k][i, j] == pytest.approx(losses[k])
			assert graphs['power'][i, j] == pytest.approx(motor_power(400, t, s, params))
			point = operating_point(400, t, s, params)
			assert graphs['peak_phase_current_sq'][i, j] == pytest.approx(point.peak_phase_current_sq)
			assert graphs['feasible'][i, j] == point.feasible

	# everything at standstill is reachable
	assert np.all(graphs['feasible'][:, 0])
	assert graphs['within_limits'][4, 0]
	# maximum torque is not available at top speed
	assert not graphs['within_limits'][-1, -1]


def test_plot():
	import matplotlib
	matplotlib.use('Agg')
	import matplotlib.pyplot as plt

	params = define_direct_drive()
	fig, ax = envelope_plot(params, voltage=400, max_speed=1000, n_speed=20, n_torque=21, show=False)
	assert ax.get_ylabel() == 'Nm'
	plt.close(fig)


def test_power_map_empty():
	params = define_direct_drive()
	torque = np.linspace(-200, 200, 9)
	graphs = power_map(400, torque, [], params)
	assert graphs['power'].shape == (9, 0)
	assert graphs['within_limits'].shape == (9, 0)
	graphs = power_map(400, [], [0, 100], params)
	assert graphs['peak_phase_current_sq'].shape == (0, 2)
