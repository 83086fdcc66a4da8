import logging

import numpy as np

from pmsmpower.utils import *
from pmsmpower.components.motor import MotorParams, assert_non_salient
from pmsmpower.components.controller import controller_loss
from pmsmpower.limits import voltage_circle

logger = logging.getLogger(__name__)


@dataclass
class OperatingPoint(Base):
	"""dq currents inferred for a commanded torque"""
	iq: float
	id: float
	peak_phase_current_sq: float
	feasible: bool	# False if the requested Iq lies outside the voltage circle


def operating_point(voltage, torque, rotor_speed, params: MotorParams) -> OperatingPoint:
	"""Find the operating point minimizing phase current for a given torque

	We follow the Id = 0 line, transitioning to the voltage limited circle
	once the back-emf requires field weakening.
	If the requested torque is unreachable, Id is taken at the circle center;
	limits are assumed to be applied upstream and mild violations are okay.
	"""
	assert_non_salient(params)

	circle = voltage_circle(voltage, rotor_speed, params)

	# ignores saliency and magnetic loss torque
	iq = torque / params.torque_constant

	iq_height = iq - circle.iq_center
	if np.abs(iq_height) > circle.iq_radius:
		logger.debug(
			"unreachable operating point torque=%f rotor_speed=%f iq=%f; using id=%f",
			torque, rotor_speed, iq, circle.id_center)
		return OperatingPoint(
			iq=iq,
			id=circle.id_center,
			peak_phase_current_sq=iq * iq + circle.id_center * circle.id_center,
			feasible=False,
		)

	with np.errstate(invalid='ignore'):
		id_ = circle.id_center + np.sqrt(circle.iq_radius * circle.iq_radius - iq_height * iq_height)
	# positive Id would only add current; stay on the Id = 0 line.
	# an undefined circle center also leaves us at Id = 0
	id_ = id_ if id_ < 0 else 0.0
	return OperatingPoint(
		iq=iq,
		id=id_,
		peak_phase_current_sq=iq * iq + id_ * id_,
		feasible=True,
	)


def operating_losses(voltage, torque, rotor_speed, point: OperatingPoint, params: MotorParams):
	"""Power terms in W at an already inferred operating point"""
	voltage = max(voltage, 0.0)
	current_sq = point.peak_phase_current_sq

	# polynomial fit of speed dependent losses
	c3, c2, c1 = (
		params.omega_loss_coefficient_cubic,
		params.omega_loss_coefficient_sq,
		params.omega_loss_coefficient_lin,
	)

	return {
		'mechanical': -torque * rotor_speed,
		# 3 phases, peak to rms
		'resistive': -1.5 * current_sq * params.Rs,
		'speed': -(c3 * rotor_speed * rotor_speed + c2 * rotor_speed + c1) * rotor_speed,
		# 0.5 for peak to rms
		'hysteresis': -0.5 * params.hysteresis_loss_coefficient * current_sq * rotor_speed * rotor_speed,
		'controller': controller_loss(voltage, current_sq, params),
	}


def motor_losses(voltage, torque, rotor_speed, params: MotorParams):
	"""Power terms in W for a commanded torque at a given bus voltage and rotor speed

	Sign convention is positive power for generation, so all losses are negative.
	Hysteresis and eddy losses are treated as pure power sinks;
	the torque they produce is ignored.

	Returns
	-------
	dict of mechanical, resistive, speed, hysteresis and controller power terms
	"""
	point = operating_point(voltage, torque, rotor_speed, params)
	return operating_losses(voltage, torque, rotor_speed, point, params)


def motor_power(voltage, torque, rotor_speed, params: MotorParams):
	"""Net electrical power in W; positive for generation"""
	losses = motor_losses(voltage, torque, rotor_speed, params)
	return float(sum(losses.values()))
