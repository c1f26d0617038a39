from cadence import CosAnneal, Exp, Interpolator, Loop, Sequence, Shifted, Triangle, Step
from cadence.utils import get_global_logger

if __name__ == '__main__':
    log = get_global_logger()

    # 5 steps of linear warmup, then cosine annealing with warm restarts every 20 steps
    warmup = Interpolator(Loop(Triangle(0.0, 1.0, 10), 5), 0.0, 0.8)
    sched = Sequence([(warmup, 5), (CosAnneal(0.05, 0.8, 20), 100)])
    log.info(sched)
    for t, lr in zip(range(1, 31), sched):
        log.raw(t, f'{lr:.4f}')

    # a step decay replayed every 30 iterations, entered 10 iterations in
    sched = Shifted(Loop(Step(0.1, 0.5, 10), 30), -10)
    log.info(sched.to_yaml())
    log.info(sched.take(40))

    log.info(Exp(1.0, 0.9).take(5))
